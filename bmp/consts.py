from bmp.image import Pixel

BLACK = Pixel(0, 0, 0)
WHITE = Pixel(255, 255, 255)
RED = Pixel(255, 0, 0)
LIME = Pixel(0, 255, 0)
BLUE = Pixel(0, 0, 255)
YELLOW = Pixel(255, 255, 0)
CYAN = Pixel(0, 255, 255)
MAGENTA = Pixel(255, 0, 255)
GRAY = Pixel(128, 128, 128)

from typing import Final

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER

# MyCAD orange palette
PRIMARY: Final = colors.HexColor("#f97316")
PRIMARY_DARK: Final = colors.HexColor("#ea580c")
SECONDARY: Final = colors.HexColor("#78716c")  # neutral, used for drafts
ACCENT: Final = colors.HexColor("#10b981")  # finalized
TEXT: Final = colors.HexColor("#0f172a")
TEXT_LIGHT: Final = colors.HexColor("#57534e")
BORDER: Final = colors.HexColor("#e7e5e4")
BACKGROUND: Final = colors.HexColor("#fafaf9")
WHITE: Final = colors.white

FONT: Final = "Helvetica"
FONT_BOLD: Final = "Helvetica-Bold"

PAGE_SIZE: Final = LETTER
MARGIN: Final[float] = 50

APP_NAME: Final = "MyCAD"
PAGE_FOOTER: Final = "MyCAD Admin - Sistema de Gestión de Vehículos"
AUTHOR: Final = "MyCAD Admin"
CREATOR: Final = "MyCAD System"

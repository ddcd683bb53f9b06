# metodic_playbooks/config.py
import os

VERSION = "1.0.0"

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(PACKAGE_DIR)

# ====== Content store ======
PLAYBOOKS_DIR = os.getenv(
    "METODIC_PLAYBOOKS_DIR", os.path.join(PROJECT_ROOT, "data", "playbooks")
)
PLAYBOOK_EXTS = (".yml", ".yaml")

# ====== Brand assets ======
LOGO_PATH = os.getenv(
    "METODIC_LOGO_PATH", os.path.join(PACKAGE_DIR, "assets", "metodic-logo.png")
)
LOGO_FALLBACK_URL = "https://metodic.io/metodic-logo.png"
METODIC_URL = "https://metodic.io"

# ====== PDF document ======
PDF_AUTHOR = "METODIC"
PDF_SUBJECT = "Extended intervention playbook"
PDF_CREATOR = "METODIC learn"
MAX_SOURCES = 20
FOOTER_CAPTION = "Made with Metodic"

# Palette (gray scale, matches the Metodic worksheet look)
PALETTE = {
    "ink": "#111827",
    "heading": "#374151",
    "body": "#1a1a1a",
    "muted": "#6b7280",
    "light": "#9ca3af",
    "border": "#d1d5db",
    "border_light": "#e5e7eb",
    "bg": "#f9fafb",
    "white": "#ffffff",
    "accent": "#374151",
}

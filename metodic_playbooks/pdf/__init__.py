from .content import FALLBACKS, resolve
from .document import PlaybookRenderError, render_playbook_pdf
from .icons import pick_icon

__all__ = ["FALLBACKS", "PlaybookRenderError", "pick_icon", "render_playbook_pdf", "resolve"]

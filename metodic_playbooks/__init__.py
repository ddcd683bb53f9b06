"""Extended playbook PDFs and the small service that serves them."""

from .config import VERSION as __version__

"""Source page discovery and loading."""

from .pages import Page, discover_pages, load_document, page_url

__all__ = ["Page", "discover_pages", "load_document", "page_url"]

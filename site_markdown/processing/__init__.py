"""site_markdown.processing: HTML cleaning and Markdown conversion."""
from site_markdown.processing.markdown import clean_html, html_to_markdown, process_page

__all__ = ["clean_html", "html_to_markdown", "process_page"]

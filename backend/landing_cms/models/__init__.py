from .tenant import Tenant
from .user import User
from .page import Page
from .page_version import PageVersion
from .markdown_content import MarkdownContent
from .media import Media
from .audit_log import AuditLog

__all__ = [
    "Tenant",
    "User",
    "Page",
    "PageVersion",
    "MarkdownContent",
    "Media",
    "AuditLog",
]

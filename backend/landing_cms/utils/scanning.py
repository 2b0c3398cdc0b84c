from typing import Callable, Optional
from flask import current_app

# Signature: hook(media_id, tenant_id, absolute_path)
ScanHook = Callable[[str, str, str], None]


def antivirus_enabled() -> bool:
    return bool(current_app.config.get("ANTIVIRUS_ENABLED"))


def queue_scan(media_id: str, tenant_id: str, absolute_path: str) -> None:
    """
    Hand a stored upload to the external scanner, if one is registered.

    The scanner flips ``scanned``/``scan_status`` later on its own; until
    then the media stays out of listings.
    """
    hook: Optional[ScanHook] = current_app.extensions.get("scan_hook")
    if hook is None:
        current_app.logger.warning("Antivirus enabled but no scan hook registered; media %s stays pending", media_id)
        return

    try:
        hook(media_id, tenant_id, absolute_path)
    except Exception:
        current_app.logger.exception("Failed to queue antivirus scan for media %s", media_id)

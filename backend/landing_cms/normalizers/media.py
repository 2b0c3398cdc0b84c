from landing_cms.utils.storage import public_url


def normalize_media(media):
    return {
        "id": media.id,
        "url": public_url(media.path),
        "thumbnail_url": public_url(media.thumbnail_path),
        "webp_url": public_url(media.webp_path),
        "filename": media.filename,
        "original_name": media.original_name,
        "mime_type": media.mime_type,
        "size": media.size,
        "type": media.type,
        "width": media.width,
        "height": media.height,
        "scan_status": media.scan_status,
        "created_at": media.created_at.isoformat() if media.created_at else None,
    }

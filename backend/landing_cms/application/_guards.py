from landing_cms.domain.exceptions import Forbidden


def require_editor(actor) -> None:
    if actor is None or not actor.can_edit:
        raise Forbidden("Insufficient permissions")

from prnow.shared.models.base import CamelModel, new_id, utc_now

__all__ = ["CamelModel", "new_id", "utc_now"]

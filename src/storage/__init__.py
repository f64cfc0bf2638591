from src.config.settings import settings
from src.storage.base import AssetStorage, AssetStorageError
from src.storage.naming import generate_asset_name
from src.storage.supabase_storage import SupabaseAssetStorage


def get_asset_storage() -> AssetStorage:
    return SupabaseAssetStorage(config=settings)


__all__ = [
    "AssetStorage",
    "AssetStorageError",
    "SupabaseAssetStorage",
    "generate_asset_name",
    "get_asset_storage",
]

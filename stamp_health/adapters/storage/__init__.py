from stamp_health.adapters.storage.blob_store import BlobStore

__all__ = ["BlobStore"]

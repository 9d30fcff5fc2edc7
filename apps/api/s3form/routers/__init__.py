from s3form.routers.storage import router as storage_router

__all__ = ["storage_router"]

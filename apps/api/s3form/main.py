from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from s3form.config import get_cors_allow_origins
from s3form.routers import storage_router

app = FastAPI(
    title="s3form API",
    description="Signed form fields for direct browser uploads to S3",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(storage_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "s3form-api"}

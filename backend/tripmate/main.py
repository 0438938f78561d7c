"""
FastAPI entrypoint for Tripmate backend application.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tripmate.core.config import settings
from tripmate.api.router import api_router

app = FastAPI(
    title="Tripmate API",
    description="Backend API for collaborative trip planning and cost splitting",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Tripmate API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}

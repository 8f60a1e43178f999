from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aura_stylist.config import logger

from .routers import router

# Initialize FastAPI application
app = FastAPI(
    title="Aura Stylist API",
    description="Image normalization and AI-powered VIP look suggestions",
    version="1.0.0",
)

app.include_router(router)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


logger.info("Aura Stylist API initialized successfully")

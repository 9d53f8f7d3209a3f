"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from careercrafter.app.api.v1 import ai, auth, dashboard, job_descriptions, resumes, sections
from careercrafter.app.core.config import settings
from careercrafter.app.core.logging_config import get_logger, setup_logging
from careercrafter.app.db.base import Base
from careercrafter.app.db.session import engine
from careercrafter.app.services.ai_service import AIEnhancementGateway, OpenAIChatGenerator
from careercrafter.app.services.pdf_generator import ResumeDocumentExporter

# Import models so they register with Base.metadata
import careercrafter.app.models  # noqa: F401

setup_logging()
logger = get_logger("main")

# Create database tables (Alembic migrations are the source of truth in deployed environments)
try:
    Base.metadata.create_all(bind=engine)
except Exception as e:
    logger.error("Database error: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.ai_gateway.close()
    logger.info("AI gateway closed")


# Initialize FastAPI app
app = FastAPI(
    title="CareerCrafter API",
    description="Resume builder API with AI-assisted writing and job match analysis",
    version=settings.app_version,
    lifespan=lifespan,
)

# Process-wide services, injected into handlers via core.dependencies
app.state.ai_gateway = AIEnhancementGateway(OpenAIChatGenerator.from_settings(settings))
app.state.document_exporter = ResumeDocumentExporter()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
app.include_router(sections.router, prefix="/api", tags=["resume sections"])
app.include_router(ai.router, prefix="/api/ai", tags=["ai"])
app.include_router(job_descriptions.router, prefix="/api/job-descriptions", tags=["job descriptions"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])


@app.get("/")
def read_root():
    """Root endpoint"""
    return {"message": "CareerCrafter API", "version": settings.app_version}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

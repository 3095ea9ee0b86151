from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from training_engine.core.config import settings
from training_engine.core.logging import configure_logging
from training_engine.endpoints import analytics, assignments, certificates, courses, materials, notifications, quiz_attempts
from training_engine.middleware.exceptions import global_exception_handler, validation_exception_handler
from training_engine.middleware.logging import RequestLoggingMiddleware
from training_engine.core.scheduler import start_scheduler, stop_scheduler
from training_engine.schemas.response import APIResponse

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(StarletteHTTPException, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(materials.router, prefix=f"{settings.API_V1_STR}/materials", tags=["Materials"])
app.include_router(courses.router, prefix=f"{settings.API_V1_STR}/courses", tags=["Courses"])
app.include_router(assignments.router, prefix=f"{settings.API_V1_STR}/assignments", tags=["Assignments"])
app.include_router(quiz_attempts.router, prefix=f"{settings.API_V1_STR}/quiz-attempts", tags=["Quiz Attempts"])
app.include_router(certificates.router, prefix=f"{settings.API_V1_STR}/certificates", tags=["Certificates"])
app.include_router(notifications.router, prefix=f"{settings.API_V1_STR}/notifications", tags=["Notifications"])
app.include_router(analytics.router, prefix=f"{settings.API_V1_STR}/analytics", tags=["Analytics"])

@app.get("/health", response_model=APIResponse[dict], tags=["Health"])
async def health_check():
    return APIResponse(message="OK", data={"status": "healthy", "version": settings.VERSION})

@app.on_event("startup")
async def startup_event():
    start_scheduler()

@app.on_event("shutdown")
async def shutdown_event():
    stop_scheduler()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

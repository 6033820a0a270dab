"""Law Contact Service - FastAPI server for the law firm contact form."""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.shared.contact.handler import CORS_HEADERS
from src.shared.contact.routes import router as contact_router

app = FastAPI(
    title="Law Contact Service",
    description="Validates law firm contact form submissions and relays them by email",
    version="0.1.0"
)

# Include contact routes
app.include_router(contact_router)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Ensure CORS headers are added to all exceptions."""
    logging.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "An error occurred while processing your request"},
        headers=dict(CORS_HEADERS)
    )


@app.get("/")
async def root():
    return {"message": "Law Contact Service API is running", "status": "ok"}


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

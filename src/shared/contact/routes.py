"""Contact form route for law firm inquiries."""

from functools import lru_cache

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from src.shared.contact.handler import ContactFormHandler

router = APIRouter(prefix="/api", tags=["contact"])

# Every method is routed here so the handler can answer 405 itself
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@lru_cache()
def get_contact_handler() -> ContactFormHandler:
    """
    Process-wide handler.
    It owns the in-memory rate limit table, so it must outlive a single request.
    """
    return ContactFormHandler()


@router.api_route("/contactForm", methods=ALL_METHODS)
async def contact_form(request: Request, handler: ContactFormHandler = Depends(get_contact_handler)):
    """
    Validate a contact form submission and email it to the firm.

    The captcha check and email delivery are blocking calls, so the pipeline
    runs in the threadpool.
    """
    body = await request.body()
    result = await run_in_threadpool(handler.handle, request.method, body, request.headers)

    if result.content is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(status_code=result.status_code, content=result.content, headers=result.headers)

"""
The single route of the inboxview service.

Every GET re-runs fetch -> extract -> overlay against the mail server;
nothing is cached between requests.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from loguru import logger

from inboxview.application.use_cases.render_latest_email import RenderLatestEmailUseCase
from inboxview.domain.errors import MailRetrievalError

router = APIRouter()


def get_use_case(request: Request) -> RenderLatestEmailUseCase:
    return request.app.state.use_case


def _error_response(error: Exception) -> PlainTextResponse:
    # trusted/personal deployment: the error detail goes back to the client
    return PlainTextResponse(f"Error retrieving email: {error}", status_code=500)


@router.get("/", response_class=HTMLResponse, tags=["email"])
def latest_email(use_case: RenderLatestEmailUseCase = Depends(get_use_case)) -> Response:
    """Render the most recent message of the configured mailbox."""
    try:
        page = use_case.run()
    except MailRetrievalError as e:
        logger.error(f"Error retrieving email: {e}")
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error rendering latest email: {e}")
        return _error_response(e)

    logger.info(f"Serving {'HTML' if page.is_html else 'text'} page ({len(page.content)} chars)")
    return HTMLResponse(content=page.content, status_code=200)

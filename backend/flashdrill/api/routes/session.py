"""Session API routes: start, flip, rate, end and restart."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from flashdrill.api.dependencies import SessionManagerDep
from flashdrill.domain.errors import (
    DeckLoadError,
    FlashdrillError,
    InsufficientCardsError,
    InvalidSessionSizeError,
    InvalidTransitionError,
    NoSectionsSelectedError,
    SessionCompleteError,
    SessionConflictError,
)
from flashdrill.domain.services.session_machine import StudyState
from flashdrill.domain.value_objects.rating import Rating
from flashdrill.domain.value_objects.session_mode import SessionMode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["session"])


# =============================================================================
# Request/Response Models
# =============================================================================


class StartSessionRequest(BaseModel):
    """Request body for starting a session."""

    sections: list[str]
    size: int | str = Field(..., description="A size preset or 'unlimited'")


class RateCardRequest(BaseModel):
    """Request body for rating the current card."""

    rating: Rating

    @field_validator("rating", mode="before")
    @classmethod
    def normalize_rating(cls, value):
        # Accept the button labels ("Hard", "Medium", "Easy") as well
        return Rating.parse(value) if isinstance(value, str) else value


class CardResponse(BaseModel):
    """Current card; the answer is only sent once the card is flipped."""

    id: str
    question: str
    answer: str | None = None
    tags: list[str]


class SummaryResponse(BaseModel):
    """Completion report."""

    easy_count: int
    total_considered: int
    message: str


class StudyStateResponse(BaseModel):
    """Everything the client needs to render the study flow."""

    phase: str
    mode: str | None = None
    size: int | None = None
    selected_sections: list[str] = []
    current_card: CardResponse | None = None
    flipped: bool = False
    progress: float = 0.0
    position: int = 0
    queue_length: int = 0
    cards_reviewed: int = 0
    easy_count: int = 0
    can_end_early: bool = False
    summary: SummaryResponse | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    error: ErrorDetail


def to_response(study: StudyState) -> StudyStateResponse:
    """Convert study state to API response."""
    card = study.current_card()
    card_response = None
    if card is not None:
        card_response = CardResponse(
            id=card.id,
            question=card.question,
            answer=card.answer if study.flipped else None,
            tags=sorted(card.tags),
        )

    config = study.config
    session = study.session
    return StudyStateResponse(
        phase=study.phase.value,
        mode=config.mode.value if config else None,
        size=config.size if config else None,
        selected_sections=sorted(config.selected_tags) if config else [],
        current_card=card_response,
        flipped=study.flipped,
        progress=study.progress(),
        position=session.position if session else 0,
        queue_length=len(session.queue) if session else 0,
        cards_reviewed=len(session.history) if session else 0,
        easy_count=session.easy_count if session else 0,
        can_end_early=bool(config and config.mode is SessionMode.UNLIMITED and card is not None),
        summary=SummaryResponse(**study.summary.to_dict()) if study.summary else None,
    )


def _http_error(status_code: int, code: str, e: Exception, details: dict | None = None):
    return HTTPException(
        status_code=status_code,
        detail={"error": {"code": code, "message": str(e), "details": details}},
    )


def _to_http_error(e: FlashdrillError) -> HTTPException:
    """Map a domain error to the API error envelope."""
    if isinstance(e, InsufficientCardsError):
        return _http_error(
            status.HTTP_400_BAD_REQUEST,
            "INSUFFICIENT_CARDS",
            e,
            {"requested": e.requested, "available": e.available},
        )
    if isinstance(e, NoSectionsSelectedError):
        return _http_error(status.HTTP_400_BAD_REQUEST, "NO_SECTIONS_SELECTED", e)
    if isinstance(e, InvalidSessionSizeError):
        return _http_error(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_SESSION_SIZE",
            e,
            {"presets": list(e.presets)},
        )
    if isinstance(e, SessionConflictError):
        return _http_error(status.HTTP_409_CONFLICT, "SESSION_CONFLICT", e)
    if isinstance(e, (InvalidTransitionError, SessionCompleteError)):
        return _http_error(status.HTTP_409_CONFLICT, "INVALID_ACTION", e)
    if isinstance(e, DeckLoadError):
        return _http_error(
            status.HTTP_503_SERVICE_UNAVAILABLE, "DECK_UNAVAILABLE", e, {"source": e.source}
        )
    return _http_error(status.HTTP_400_BAD_REQUEST, "SESSION_ERROR", e)


# =============================================================================
# Routes
# =============================================================================


@router.post(
    "/start",
    response_model=StudyStateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid selection or not enough cards"},
        409: {"model": ErrorResponse, "description": "Session conflict"},
        503: {"model": ErrorResponse, "description": "Deck unavailable"},
    },
)
async def start_session(
    request: StartSessionRequest,
    session_manager: SessionManagerDep,
) -> StudyStateResponse:
    """Start a new review session over the selected sections."""
    try:
        study = await session_manager.start(request.sections, request.size)
    except FlashdrillError as e:
        raise _to_http_error(e) from None
    return to_response(study)


@router.get("/current", response_model=StudyStateResponse)
async def get_current_session(session_manager: SessionManagerDep) -> StudyStateResponse:
    """Get the current study state.

    Used by the client to resume after a reload.
    """
    return to_response(session_manager.study)


@router.post(
    "/flip",
    response_model=StudyStateResponse,
    responses={409: {"model": ErrorResponse, "description": "No session in progress"}},
)
async def flip_card(session_manager: SessionManagerDep) -> StudyStateResponse:
    """Reveal the back of the current card (or hide it again)."""
    try:
        study = await session_manager.flip()
    except FlashdrillError as e:
        raise _to_http_error(e) from None
    return to_response(study)


@router.post(
    "/rate",
    response_model=StudyStateResponse,
    responses={409: {"model": ErrorResponse, "description": "No session in progress"}},
)
async def rate_card(
    request: RateCardRequest,
    session_manager: SessionManagerDep,
) -> StudyStateResponse:
    """Rate the current card and advance.

    The response carries the summary once the session completes.
    """
    try:
        study = await session_manager.rate(request.rating)
    except FlashdrillError as e:
        raise _to_http_error(e) from None
    return to_response(study)


@router.post(
    "/end",
    response_model=StudyStateResponse,
    responses={409: {"model": ErrorResponse, "description": "Not an unlimited session"}},
)
async def end_session(session_manager: SessionManagerDep) -> StudyStateResponse:
    """End an unlimited session and get the summary."""
    try:
        study = await session_manager.end()
    except FlashdrillError as e:
        raise _to_http_error(e) from None
    return to_response(study)


@router.post(
    "/restart",
    response_model=StudyStateResponse,
    responses={409: {"model": ErrorResponse, "description": "Session not completed"}},
)
async def restart_session(session_manager: SessionManagerDep) -> StudyStateResponse:
    """Return to section selection after a completed session."""
    try:
        study = await session_manager.restart()
    except FlashdrillError as e:
        raise _to_http_error(e) from None
    return to_response(study)

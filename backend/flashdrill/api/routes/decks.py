"""Deck API routes: section listing and reload."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from flashdrill.api.dependencies import SessionManagerDep
from flashdrill.config import get_default_session_size
from flashdrill.domain.constants import UNLIMITED_SIZE_CHOICE
from flashdrill.domain.errors import DeckLoadError

router = APIRouter(prefix="/api/decks", tags=["decks"])


# =============================================================================
# Response Models
# =============================================================================


class SectionsResponse(BaseModel):
    """Sections and session sizes for the selection screen.

    Every section starts out selected.
    """

    sections: list[str]
    card_count: int
    size_presets: list[int]
    default_size: int
    unlimited_choice: str = UNLIMITED_SIZE_CHOICE


class ReloadResponse(BaseModel):
    """Response for deck reload."""

    card_count: int
    sections: list[str]


def _deck_unavailable(e: DeckLoadError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={
            "error": {
                "code": "DECK_UNAVAILABLE",
                "message": str(e),
                "details": {"source": e.source},
            }
        },
    )


# =============================================================================
# Routes
# =============================================================================


@router.get(
    "/sections",
    response_model=SectionsResponse,
    responses={
        503: {"description": "Deck could not be loaded"},
    },
)
async def list_sections(session_manager: SessionManagerDep) -> SectionsResponse:
    """List deck sections with the session size options."""
    try:
        sections = session_manager.sections()
    except DeckLoadError as e:
        raise _deck_unavailable(e) from None

    presets = list(session_manager.size_presets)

    return SectionsResponse(
        sections=sections,
        card_count=len(session_manager.deck),
        size_presets=presets,
        default_size=get_default_session_size(),
    )


@router.post(
    "/reload",
    response_model=ReloadResponse,
    responses={
        503: {"description": "Deck could not be loaded"},
    },
)
async def reload_deck(session_manager: SessionManagerDep) -> ReloadResponse:
    """Load the deck again from its source.

    An in-progress session keeps the cards it started with.
    """
    card_count = await session_manager.load_deck()
    if session_manager.deck_error is not None:
        raise _deck_unavailable(session_manager.deck_error) from None

    return ReloadResponse(card_count=card_count, sections=session_manager.sections())

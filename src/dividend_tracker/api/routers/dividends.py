"""Dividend endpoints."""

from fastapi import APIRouter, Depends

from dividend_tracker.api.deps import get_current_user, get_ledger_service
from dividend_tracker.api.schemas import (
    DividendCreatedResponse,
    DividendRequest,
    DividendResponse,
)
from dividend_tracker.domain.models import User
from dividend_tracker.services import LedgerService

router = APIRouter(prefix="/api/dividends", tags=["dividends"])


@router.post("", response_model=DividendCreatedResponse, status_code=201)
def record_dividend(
    data: DividendRequest,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> DividendCreatedResponse:
    """Record a dividend payment for a held ticker."""
    dividend = ledger.record_dividend(
        user_id=user.user_id,
        ticker=data.ticker,
        shares_held=data.shares_held,
        amount_per_share=data.amount_per_share,
        payment_date=data.payment_date,
        record_date=data.record_date,
        notes=data.notes,
    )
    return DividendCreatedResponse(
        message="Dividend added successfully",
        dividend=DividendResponse.model_validate(dividend),
    )


@router.get("", response_model=list[DividendResponse])
def list_dividends(
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[DividendResponse]:
    """All dividends, newest payment first."""
    return [DividendResponse.model_validate(d) for d in ledger.list_dividends(user.user_id)]


@router.get("/{ticker}", response_model=list[DividendResponse])
def list_dividends_for_ticker(
    ticker: str,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[DividendResponse]:
    """Dividends for one ticker."""
    return [
        DividendResponse.model_validate(d)
        for d in ledger.list_dividends(user.user_id, ticker)
    ]

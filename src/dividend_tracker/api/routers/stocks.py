"""Holding, valuation and BUY/SELL endpoints."""

from fastapi import APIRouter, Depends

from dividend_tracker.api.deps import (
    get_current_user,
    get_ledger_service,
    get_valuation_service,
)
from dividend_tracker.api.schemas import (
    HoldingResponse,
    HoldingValuationResponse,
    PortfolioSummaryResponse,
    TransactionRequest,
    TransactionResponse,
    TransactionResultResponse,
)
from dividend_tracker.domain.models import TransactionType, User
from dividend_tracker.services import LedgerService, ValuationService

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("", response_model=list[HoldingValuationResponse])
def list_stocks(
    user: User = Depends(get_current_user),
    valuation: ValuationService = Depends(get_valuation_service),
) -> list[HoldingValuationResponse]:
    """Holdings with current price, gains, dividend income and total return."""
    return [
        HoldingValuationResponse.model_validate(view)
        for view in valuation.value_portfolio(user.user_id)
    ]


@router.get("/summary", response_model=PortfolioSummaryResponse)
def portfolio_summary(
    user: User = Depends(get_current_user),
    valuation: ValuationService = Depends(get_valuation_service),
) -> PortfolioSummaryResponse:
    """Portfolio-wide totals."""
    return PortfolioSummaryResponse.model_validate(valuation.portfolio_summary(user.user_id))


@router.post("/transaction", response_model=TransactionResultResponse)
def record_transaction(
    data: TransactionRequest,
    user: User = Depends(get_current_user),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TransactionResultResponse:
    """Apply a BUY or SELL to the user's holding."""
    if data.transaction_type == TransactionType.BUY:
        holding = ledger.apply_buy(
            user_id=user.user_id,
            ticker=data.ticker,
            shares=data.shares,
            price_per_share=data.price_per_share,
            transaction_date=data.transaction_date,
            company_name=data.company_name,
            notes=data.notes,
        )
        # A stored holding always has shares, so only a new one equals this BUY
        created = holding.total_shares == data.shares
        return TransactionResultResponse(
            message="Stock added successfully" if created else "Stock updated successfully",
            holding=HoldingResponse.model_validate(holding),
        )

    result = ledger.apply_sell(
        user_id=user.user_id,
        ticker=data.ticker,
        shares=data.shares,
        price_per_share=data.price_per_share,
        transaction_date=data.transaction_date,
        notes=data.notes,
    )
    return TransactionResultResponse(
        message="Stock sold completely" if result.liquidated else "Stock sold successfully",
        transaction=TransactionResponse.model_validate(result.transaction),
        holding=HoldingResponse.model_validate(result.holding) if result.holding else None,
        realized_gain_loss=result.transaction.realized_gain_loss,
    )

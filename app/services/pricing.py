"""Conveyancing quote pricing: legal fees, disbursements and SDLT"""
import logging
from decimal import Decimal, ROUND_HALF_UP, localcontext

from app.schemas.quote import FeeLineItem, QuoteResult, TransactionInput

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

BASE_LEGAL_FEE = Decimal("500")
PURCHASE_LEGAL_FEE = Decimal("750")
SALE_LEGAL_FEE = Decimal("600")

SEARCH_FEES = Decimal("300")
ID_CHECKS = Decimal("20")
BANK_TRANSFER_FEE = Decimal("40")

VAT_RATE = Decimal("0.20")

# (inclusive upper bound, fee); prices above the last bound pay LAND_REGISTRY_TOP_FEE
LAND_REGISTRY_BANDS = (
    (Decimal("80000"), Decimal("20")),
    (Decimal("100000"), Decimal("40")),
    (Decimal("200000"), Decimal("100")),
    (Decimal("500000"), Decimal("150")),
    (Decimal("1000000"), Decimal("295")),
)
LAND_REGISTRY_TOP_FEE = Decimal("500")

FTB_NIL_RATE_LIMIT = Decimal("425000")
FTB_RELIEF_CEILING = Decimal("625000")
FTB_RATE = Decimal("0.05")

# (lower bound, upper bound or None for unbounded, rate)
SDLT_BANDS = (
    (Decimal("250000"), Decimal("925000"), Decimal("0.05")),
    (Decimal("925000"), Decimal("1500000"), Decimal("0.10")),
    (Decimal("1500000"), None, Decimal("0.12")),
)


def land_registry_fee(price: Decimal) -> Decimal:
    for upper, fee in LAND_REGISTRY_BANDS:
        if price <= upper:
            return fee
    return LAND_REGISTRY_TOP_FEE


def stamp_duty(price: Decimal, is_first_time_buyer: bool = False) -> Decimal:
    """
    Residential SDLT for England/NI.

    First-time buyers pay nothing up to 425k and 5% of the slice above it up
    to 625k. Above 625k the relief is lost entirely and the standard bands
    apply to the full price. Standard-rate duty is rounded to whole pounds;
    the relief band amount is returned as computed.
    """
    if price <= ZERO:
        return ZERO

    if is_first_time_buyer:
        if price <= FTB_NIL_RATE_LIMIT:
            return ZERO
        if price <= FTB_RELIEF_CEILING:
            return (price - FTB_NIL_RATE_LIMIT) * FTB_RATE

    # enough digits to hold every whole pound of the duty
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, price.adjusted() + 8)
        duty = ZERO
        for lower, upper, rate in SDLT_BANDS:
            if price > lower:
                top = price if upper is None else min(price, upper)
                duty += (top - lower) * rate
        return duty.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def calculate_quote(req: TransactionInput) -> QuoteResult:
    purchase_price = req.purchase.property_price if req.purchase else ZERO
    sale_price = req.sale.property_price if req.sale else ZERO
    first_time_buyer = req.purchase.is_first_time_buyer if req.purchase else False
    buying = purchase_price > ZERO
    selling = sale_price > ZERO

    purchase_fee = PURCHASE_LEGAL_FEE if buying else ZERO
    sale_fee = SALE_LEGAL_FEE if selling else ZERO
    legal_fees_ex_vat = BASE_LEGAL_FEE + purchase_fee + sale_fee

    search_fees = SEARCH_FEES if buying else ZERO
    registry_fee = land_registry_fee(purchase_price) if buying else ZERO
    disbursements = search_fees + registry_fee + ID_CHECKS + BANK_TRANSFER_FEE

    duty = stamp_duty(purchase_price, first_time_buyer) if buying else ZERO

    vat = legal_fees_ex_vat * VAT_RATE

    # (description, amount, shown even when zero)
    entries = (
        ("Base Legal Fee", BASE_LEGAL_FEE, True),
        ("Purchase Legal Fee", purchase_fee, False),
        ("Sale Legal Fee", sale_fee, False),
        ("Search Fees", search_fees, False),
        ("Land Registry Fee", registry_fee, False),
        ("ID Verification", ID_CHECKS, True),
        ("Bank Transfer Fee", BANK_TRANSFER_FEE, True),
        ("VAT (20%)", vat, True),
    )
    breakdown = [
        FeeLineItem(description=description, amount=amount)
        for description, amount, always in entries
        if always or amount > ZERO
    ]

    total_fee = legal_fees_ex_vat + vat + disbursements + duty
    logger.debug(f"Quote calculated for {req.transaction_type} transaction: total {total_fee}")

    return QuoteResult(
        total_fee=total_fee,
        legal_fees=legal_fees_ex_vat + vat,
        disbursements=disbursements,
        stamp_duty=duty,
        breakdown=breakdown,
    )

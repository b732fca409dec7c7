import re
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from app.core.enums import (
    CallTime,
    ContactMethod,
    PropertyType,
    PurchaseType,
    Tenure,
    TransactionType,
)

# Decimal in Python, plain number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

UK_POSTCODE = re.compile(r"^[A-Z]{1,2}\d[A-Z\d]? ?\d[A-Z]{2}$", re.IGNORECASE)
UK_PHONE = re.compile(r"^(?:(?:\+44)|(?:0))(?:\d\s?){9,10}$")

# Upper bound accepted for any property price (one quadrillion pounds)
MAX_PROPERTY_PRICE = Decimal("1e15")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def check_transaction_sides(transaction_type: TransactionType, purchase, sale) -> None:
    if transaction_type.includes_purchase and purchase is None:
        raise ValueError(f"purchase details are required for a '{transaction_type}' transaction")
    if not transaction_type.includes_purchase and purchase is not None:
        raise ValueError(f"purchase details are not allowed for a '{transaction_type}' transaction")
    if transaction_type.includes_sale and sale is None:
        raise ValueError(f"sale details are required for a '{transaction_type}' transaction")
    if not transaction_type.includes_sale and sale is not None:
        raise ValueError(f"sale details are not allowed for a '{transaction_type}' transaction")


# Pricing engine input

class PurchaseInput(CamelModel):
    property_price: Decimal = Field(ge=0, le=MAX_PROPERTY_PRICE)
    is_first_time_buyer: bool = False


class SaleInput(CamelModel):
    property_price: Decimal = Field(ge=0, le=MAX_PROPERTY_PRICE)


class TransactionInput(CamelModel):
    transaction_type: TransactionType
    purchase: Optional[PurchaseInput] = None
    sale: Optional[SaleInput] = None

    @model_validator(mode="after")
    def sides_match_type(self):
        check_transaction_sides(self.transaction_type, self.purchase, self.sale)
        return self


# Pricing engine output

class FeeLineItem(CamelModel):
    description: str
    amount: Money


class QuoteResult(CamelModel):
    total_fee: Money
    legal_fees: Money
    disbursements: Money
    stamp_duty: Money
    breakdown: List[FeeLineItem]


# Enquiry payload submitted by the quote form

class _PropertyDetails(CamelModel):
    property_price: Decimal = Field(ge=0, le=MAX_PROPERTY_PRICE)
    property_address: Optional[str] = Field(default=None, min_length=5)
    property_postcode: Optional[str] = None
    tenure: Optional[Tenure] = None
    has_mortgage: Optional[bool] = None
    mortgage_lender: Optional[str] = None

    @field_validator("property_postcode")
    @classmethod
    def valid_postcode(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not UK_POSTCODE.match(v):
            raise ValueError("Please enter a valid UK postcode")
        return v.upper()

    @model_validator(mode="after")
    def lender_when_mortgaged(self):
        if self.has_mortgage and not self.mortgage_lender:
            raise ValueError("Please specify your mortgage lender")
        return self


class BuyingDetails(_PropertyDetails):
    property_type: Optional[PropertyType] = None
    purchase_type: Optional[PurchaseType] = None
    auction_date: Optional[datetime] = None
    is_first_time_buyer: bool = False
    is_buy_to_let: Optional[bool] = None
    is_using_help_to_buy: bool = False
    is_shared_ownership: bool = False
    shared_ownership_percentage: Optional[float] = Field(default=None, ge=25, le=75)
    has_gifted_deposit: bool = False
    number_of_buyers: int = Field(default=1, ge=1, le=4)

    @model_validator(mode="after")
    def conditional_fields(self):
        if self.purchase_type == PurchaseType.AUCTION and self.auction_date is None:
            raise ValueError("Auction date is required for auction purchases")
        if self.is_shared_ownership and self.shared_ownership_percentage is None:
            raise ValueError("Please specify the shared ownership percentage")
        return self


class SellingDetails(_PropertyDetails):
    number_of_sellers: int = Field(default=1, ge=1, le=4)


class ContactDetails(CamelModel):
    first_name: str = Field(min_length=2)
    last_name: str = Field(min_length=2)
    email: EmailStr
    phone: str
    preferred_contact_method: ContactMethod
    best_time_to_call: Optional[CallTime] = None
    marketing_consent: bool = False
    terms_accepted: Optional[bool] = None

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, v: str) -> str:
        if not UK_PHONE.match(v.strip()):
            raise ValueError("Please enter a valid UK phone number")
        return v.strip()

    @field_validator("terms_accepted")
    @classmethod
    def terms_must_be_accepted(cls, v: Optional[bool]) -> Optional[bool]:
        if v is False:
            raise ValueError("You must accept the terms and conditions")
        return v


class QuoteRequest(CamelModel):
    transaction_type: TransactionType
    purchase: Optional[BuyingDetails] = None
    sale: Optional[SellingDetails] = None
    contact: Optional[ContactDetails] = None

    @model_validator(mode="after")
    def sides_match_type(self):
        check_transaction_sides(self.transaction_type, self.purchase, self.sale)
        return self

    def to_transaction_input(self) -> TransactionInput:
        """Keep only the facts that affect pricing."""
        purchase = None
        if self.purchase is not None:
            purchase = PurchaseInput(
                property_price=self.purchase.property_price,
                is_first_time_buyer=self.purchase.is_first_time_buyer,
            )
        sale = None
        if self.sale is not None:
            sale = SaleInput(property_price=self.sale.property_price)
        return TransactionInput(
            transaction_type=self.transaction_type,
            purchase=purchase,
            sale=sale,
        )

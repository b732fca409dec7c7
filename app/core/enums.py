from enum import Enum


class TransactionType(str, Enum):
    BUYING = "buying"
    SELLING = "selling"
    BOTH = "both"

    def __str__(self):
        return self.value

    @property
    def includes_purchase(self) -> bool:
        return self in (TransactionType.BUYING, TransactionType.BOTH)

    @property
    def includes_sale(self) -> bool:
        return self in (TransactionType.SELLING, TransactionType.BOTH)


class PropertyType(str, Enum):
    HOUSE = "house"
    FLAT = "flat"
    BUNGALOW = "bungalow"
    MAISONETTE = "maisonette"

    def __str__(self):
        return self.value


class Tenure(str, Enum):
    FREEHOLD = "freehold"
    LEASEHOLD = "leasehold"

    def __str__(self):
        return self.value


class PurchaseType(str, Enum):
    STANDARD = "standard"
    AUCTION = "auction"
    NEW_BUILD = "newBuild"

    def __str__(self):
        return self.value


class ContactMethod(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    EITHER = "either"

    def __str__(self):
        return self.value


class CallTime(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANYTIME = "anytime"

    def __str__(self):
        return self.value

from enum import Enum


class Currency(str, Enum):
    EGP = "EGP"
    USD = "USD"
    EUR = "EUR"

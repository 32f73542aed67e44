# hrdesk/schemas/offer_letter_schema.py
from pydantic import BaseModel, field_validator
from datetime import date
from decimal import Decimal
from typing import Optional

from hrdesk.employees.models import salary_fits


class OfferLetterSchema(BaseModel):
    doj: Optional[date] = None
    salary_amount: Optional[Decimal] = None

    @field_validator("doj", mode="before")
    @classmethod
    def blank_doj(cls, v):
        return None if v == "" else v

    @field_validator("salary_amount", mode="before")
    @classmethod
    def clean_amount(cls, v):
        # clients send "", "25,000" or numbers
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return None
        if isinstance(v, str):
            return v.replace(",", "").strip()
        return v

    @field_validator("salary_amount")
    @classmethod
    def non_negative(cls, v):
        if v is not None and not salary_fits(v):
            raise ValueError("salary_amount must be between 0 and 99999999.99 with at most 2 decimals")
        return v

"""Payment form validation.

The payment itself is only a confirmation gate: a valid form lets the
checkout go ahead, nothing is charged.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


class PaymentForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    customer_name: str | None = Field(None, alias="customerName")
    card_number: str = Field(alias="cardNumber", min_length=12, max_length=19, pattern=r"^\d+$")
    expiry: str = Field(pattern=r"^(0[1-9]|1[0-2])/\d{2}$")
    cvv: str = Field(pattern=r"^\d{3,4}$")

    @field_validator("card_number", mode="before")
    @classmethod
    def drop_separators(cls, value: Any) -> Any:
        if isinstance(value, str):
            return re.sub(r"[\s-]", "", value)
        return value


def validate_payment(data: Mapping[str, Any] | PaymentForm) -> PaymentForm:
    """Check the payment form.

    Raises:
        ValidationError: Listing every missing or invalid field.
    """
    if isinstance(data, PaymentForm):
        return data
    try:
        return PaymentForm.model_validate(dict(data))
    except PydanticValidationError as exc:
        fields: list[str] = []
        for err in exc.errors():
            name = str(err["loc"][0]) if err["loc"] else "form"
            if name not in fields:
                fields.append(name)
        raise ValidationError(fields) from exc

"""Form schemas.

Field aliases are the form control names (``streetId``, ``packageId``);
messages are shown to the user as-is.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from warehouse.actions.base import optional_text, required_text, required_uuid
from warehouse.api.transform import parse_datetime
from warehouse.models import AddressStatus, ExpedicaoStatus

CNPJ_PATTERN = re.compile(r"^\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}$")
MIN_WEIGHT = Decimal("0.01")
MAX_WEIGHT = Decimal("99999.99")


class FormModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_default=True)


class CustomerForm(FormModel):
    name: str = None
    cnpj: str = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        text = required_text(value, "Nome é obrigatório", 255, "Nome deve ter no máximo 255 caracteres")
        if len(text) < 3:
            raise PydanticCustomError("too_short", "Nome deve ter pelo menos 3 caracteres")
        return text

    @field_validator("cnpj", mode="before")
    @classmethod
    def _cnpj(cls, value: Any) -> str:
        text = required_text(value, "CNPJ é obrigatório")
        if not CNPJ_PATTERN.match(text):
            raise PydanticCustomError("cnpj", "CNPJ deve ter o formato XX.XXX.XXX/XXXX-XX")
        return text


class StreetForm(FormModel):
    name: str = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return required_text(
            value, "Nome da rua é obrigatório", 255, "Nome da rua deve ter no máximo 255 caracteres"
        )


class AddressForm(FormModel):
    street_id: int = Field(None, alias="streetId")
    number: str = None
    complement: str = ""
    status: AddressStatus = AddressStatus.EMPTY

    @field_validator("street_id", mode="before")
    @classmethod
    def _street_id(cls, value: Any) -> int:
        text = required_text(value, "Rua é obrigatória")
        try:
            street_id = int(text)
        except ValueError:
            raise PydanticCustomError("street", "Rua é obrigatória") from None
        if street_id <= 0:
            raise PydanticCustomError("street", "Rua é obrigatória")
        return street_id

    @field_validator("number", mode="before")
    @classmethod
    def _number(cls, value: Any) -> str:
        return required_text(value, "Número é obrigatório", 50, "Número deve ter no máximo 50 caracteres")

    @field_validator("complement", mode="before")
    @classmethod
    def _complement(cls, value: Any) -> str:
        return optional_text(value, 255, "Complemento deve ter no máximo 255 caracteres")

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> AddressStatus:
        if value is None or value == "":
            return AddressStatus.EMPTY
        try:
            return AddressStatus(value)
        except ValueError:
            raise PydanticCustomError("status", "Status inválido") from None


class PackageUpdateForm(FormModel):
    package_number: str = Field(None, alias="packageNumber")
    lot: str = None
    weight: Decimal = None

    @field_validator("package_number", mode="before")
    @classmethod
    def _package_number(cls, value: Any) -> str:
        return required_text(
            value,
            "Número do pacote é obrigatório",
            100,
            "Número do pacote deve ter no máximo 100 caracteres",
        )

    @field_validator("lot", mode="before")
    @classmethod
    def _lot(cls, value: Any) -> str:
        return required_text(value, "Lote é obrigatório", 100, "Lote deve ter no máximo 100 caracteres")

    @field_validator("weight", mode="before")
    @classmethod
    def _weight(cls, value: Any) -> Decimal:
        text = required_text(value, "Peso é obrigatório")
        try:
            weight = Decimal(text.replace(",", "."))
        except InvalidOperation:
            raise PydanticCustomError("weight", "Peso deve ser um número") from None
        if not weight.is_finite() or weight < MIN_WEIGHT:
            raise PydanticCustomError("weight", "Peso deve ser maior que 0")
        if weight > MAX_WEIGHT:
            raise PydanticCustomError("weight", "Peso deve ser no máximo 99999.99 kg")
        return weight


class PackageForm(PackageUpdateForm):
    take_up_id: str = Field(None, alias="takeUpId")

    @field_validator("take_up_id", mode="before")
    @classmethod
    def _take_up_id(cls, value: Any) -> str:
        return required_uuid(value, "Take-up é obrigatório", "ID do take-up deve ser um UUID válido")


class TakeUpForm(FormModel):
    customer_id: str = Field(None, alias="customerId")

    @field_validator("customer_id", mode="before")
    @classmethod
    def _customer_id(cls, value: Any) -> str:
        return required_uuid(value, "Cliente é obrigatório", "ID do cliente deve ser um UUID válido")


class EnderecamentoForm(FormModel):
    package_id: str = Field(None, alias="packageId")
    address_id: str = Field(None, alias="addressId")

    @field_validator("package_id", mode="before")
    @classmethod
    def _package_id(cls, value: Any) -> str:
        return required_uuid(value, "Pacote é obrigatório", "ID do pacote deve ser um UUID válido")

    @field_validator("address_id", mode="before")
    @classmethod
    def _address_id(cls, value: Any) -> str:
        return required_uuid(value, "Endereço é obrigatório", "ID do endereço deve ser um UUID válido")


class ExpedicaoForm(FormModel):
    code: str = None
    destination: str = None
    responsible: str = None
    carrier: str = None
    tracking: str = None
    package_ids: list[str] = Field(None, alias="packageIds")
    expected_delivery: datetime | None = Field(None, alias="expectedDelivery")
    notes: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _code(cls, value: Any) -> str:
        return required_text(value, "Código é obrigatório", 50, "Código deve ter no máximo 50 caracteres")

    @field_validator("destination", mode="before")
    @classmethod
    def _destination(cls, value: Any) -> str:
        return required_text(value, "Destino é obrigatório", 255, "Destino deve ter no máximo 255 caracteres")

    @field_validator("responsible", mode="before")
    @classmethod
    def _responsible(cls, value: Any) -> str:
        return required_text(
            value, "Responsável é obrigatório", 100, "Nome do responsável deve ter no máximo 100 caracteres"
        )

    @field_validator("carrier", mode="before")
    @classmethod
    def _carrier(cls, value: Any) -> str:
        return required_text(
            value,
            "Transportadora é obrigatória",
            100,
            "Nome da transportadora deve ter no máximo 100 caracteres",
        )

    @field_validator("tracking", mode="before")
    @classmethod
    def _tracking(cls, value: Any) -> str:
        return required_text(
            value,
            "Código de rastreamento é obrigatório",
            100,
            "Código de rastreamento deve ter no máximo 100 caracteres",
        )

    @field_validator("package_ids", mode="before")
    @classmethod
    def _package_ids(cls, value: Any) -> list[str]:
        # A single selected checkbox arrives as a bare string.
        if isinstance(value, str):
            value = [value]
        ids = [str(item).strip() for item in (value or []) if str(item).strip()]
        if not ids:
            raise PydanticCustomError("required", "Pelo menos um pacote deve ser selecionado")
        for item in ids:
            required_uuid(item, "Pelo menos um pacote deve ser selecionado", "IDs dos pacotes devem ser UUIDs válidos")
        return ids

    @field_validator("expected_delivery", mode="before")
    @classmethod
    def _expected_delivery(cls, value: Any) -> datetime | None:
        try:
            return parse_datetime(value)
        except ValueError:
            raise PydanticCustomError("date", "Data de entrega prevista inválida") from None

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, value: Any) -> str | None:
        text = "" if value is None else str(value).strip()
        return text or None


class StatusUpdateForm(FormModel):
    status: ExpedicaoStatus = None
    notes: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> ExpedicaoStatus:
        try:
            return ExpedicaoStatus(value)
        except ValueError:
            raise PydanticCustomError("status", "Status inválido") from None

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, value: Any) -> str | None:
        text = "" if value is None else str(value).strip()
        return text or None

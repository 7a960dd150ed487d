"""Enumeration types for warehouse entities."""

from enum import Enum


class AddressStatus(str, Enum):
    EMPTY = "empty"
    FILLED = "filled"


class ExpedicaoStatus(str, Enum):
    PREPARANDO = "Preparando"
    EXPEDIDO = "Expedido"
    EM_TRANSITO = "Em Trânsito"
    ENTREGUE = "Entregue"

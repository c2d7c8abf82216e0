from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Access level of a logged-in account."""

    ADMIN = "Administrador"
    OBREIRO = "Obreiro"


class WorkerPosition(str, Enum):
    AUXILIAR_DE_OBRA = "Auxiliar de Obra"
    OBREIRO = "Obreiro"
    DIACONO = "Diácono"
    PRESBITERO = "Presbítero"
    EVANGELISTA = "Evangelista"
    MISSIONARIO = "Missionário(a)"
    PASTOR_AUXILIAR = "Pastor Auxiliar"
    PASTOR = "Pastor"
    PASTOR_SETORIAL = "Pastor Setorial"
    PASTOR_REGIONAL = "Pastor Regional"
    PASTOR_PRESIDENTE = "Pastor Presidente"
    BISPO = "Bispo"
    BISPO_PRESIDENTE = "Bispo Presidente"


class WorkerStatus(str, Enum):
    ACTIVE = "Ativo"
    INACTIVE = "Inativo"


class EventType(str, Enum):
    CULTO = "Culto"
    VIGILIA = "Vigília"
    SANTA_CEIA = "Santa Ceia"
    REUNIAO = "Reunião"
    OUTRO = "Outro"


class Severity(str, Enum):
    """Notification severity. Only affects presentation."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Domain(str, Enum):
    """The five independently persisted state domains."""

    USER = "user"
    WORKERS = "workers"
    EVENTS = "events"
    UNIFORMS = "uniforms"
    SETTINGS = "settings"


class EventFilter(str, Enum):
    UPCOMING = "upcoming"
    PAST = "past"
    ALL = "all"

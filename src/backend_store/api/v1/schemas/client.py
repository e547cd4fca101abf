from datetime import datetime, time

from pydantic import BaseModel

from ....models import Client, ClientFilter
from .base import ModelDTO

DATE_FORMAT = "%Y-%m-%d"
DEFAULT_LIMIT = 100
MAX_LIMIT = 100


class ClientDTO(ModelDTO):
    orm_model = Client

    id: int | None = None
    name: str | None = None
    email: str | None = None
    cpf: str | None = None
    cnpj: str | None = None
    description: str | None = None
    status: bool | None = None
    version: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def parse_date(value: str | None, *, end_of_day: bool = False) -> datetime | None:
    """
    Parse a `YYYY-MM-DD` query value. Empty or unparsable values mean "no
    filter" and return None. Upper bounds cover the whole day.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.strptime(value.strip(), DATE_FORMAT)
    except ValueError:
        return None
    if end_of_day:
        return datetime.combine(parsed.date(), time.max)
    return parsed


class ClientFilterDTO(BaseModel):
    name: str | None = None
    email: str | None = None
    cpf: str | None = None
    cnpj: str | None = None
    status: bool | None = None
    version: int | None = None
    created_from: str | None = None
    created_to: str | None = None
    updated_from: str | None = None
    updated_to: str | None = None
    limit: int = 0
    offset: int = 0
    sort_by: str | None = None
    sort_order: str | None = None

    def to_model(self) -> ClientFilter:
        limit = self.limit
        if limit <= 0:
            limit = DEFAULT_LIMIT
        limit = min(limit, MAX_LIMIT)

        return ClientFilter(
            name=self.name or None,
            email=self.email or None,
            cpf=self.cpf or None,
            cnpj=self.cnpj or None,
            status=self.status,
            version=self.version,
            created_from=parse_date(self.created_from),
            created_to=parse_date(self.created_to, end_of_day=True),
            updated_from=parse_date(self.updated_from),
            updated_to=parse_date(self.updated_to, end_of_day=True),
            limit=limit,
            offset=max(self.offset, 0),
            sort_by=self.sort_by or "id",
            sort_order="desc" if (self.sort_order or "").lower() == "desc" else "asc",
        )

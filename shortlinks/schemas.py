"""Request schemas and input validation

Every request field is validated here before any data store mutation happens.
A pydantic ValidationError raised by this module means the request carries
invalid input (HTTP 422).
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter, ValidationError

from shortlinks.constants import Link, TTL


_any_url = TypeAdapter(AnyUrl)


def _absolute_url(value: str) -> str:
    # Validate only: the URL is stored exactly as the client sent it
    try:
        _any_url.validate_python(value)
    except ValidationError as e:
        raise ValueError(f'{value!r} is not an absolute URL') from e
    return value


AbsoluteURL = Annotated[str, AfterValidator(_absolute_url)]
Expire = Annotated[int, Field(gt=0, le=TTL.MAX_EXPIRE)]
LinkId = Annotated[str, StringConstraints(pattern=rf'^[A-Za-z0-9_-]{{{Link.ID_LENGTH}}}$')]

_linkid = TypeAdapter(LinkId)


class CreateLinkRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: AbsoluteURL
    base_url: Optional[AbsoluteURL] = Field(default=None, alias='baseUrl')
    expire: Optional[Expire] = None


class UpdateLinkRequest(BaseModel):
    url: Optional[AbsoluteURL] = None
    expire: Optional[Expire] = None


def validate_linkid(value: str | None) -> str:
    """Return the link identifier if it has the expected length and alphabet.

    Raises:
        ValidationError: If the identifier is malformed.
    """
    return _linkid.validate_python(value)


def describe_validation_error(error: ValidationError) -> str:
    """Summarize a ValidationError as 'field: reason; ...'"""
    parts = []
    for detail in error.errors():
        location = '.'.join(str(part) for part in detail['loc']) or 'value'
        parts.append(f'{location}: {detail["msg"]}')
    return '; '.join(parts)

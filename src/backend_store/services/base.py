from contextlib import contextmanager

from ..exceptions.base import RepositoryError, WrappedOperationError, ZeroIDError
from ..validators.field_validators import is_positive_id


@contextmanager
def translate_errors(wrapper: type[WrappedOperationError],
                     passthrough: tuple[type[BaseException], ...] = (RepositoryError,)):
    """
    Let the `passthrough` kinds (and `wrapper` itself) escape untouched; wrap
    everything else as `wrapper`, chained to the original error.
    """
    try:
        yield
    except passthrough:
        raise
    except wrapper:
        raise
    except Exception as e:
        raise wrapper.wrap(e) from e


def require_positive_id(value: int | None, name: str | None = None) -> None:
    if not is_positive_id(value):
        label = f"{name} ID" if name else "ID"
        field = f"{name}_id" if name else "id"
        raise ZeroIDError(f"{label} must be greater than zero", fields=[field])

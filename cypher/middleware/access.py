from functools import wraps
from flask_jwt_extended import get_jwt
from cypher.extensions.extension import db
from cypher.errors import AuthorizationError, NotFoundError
from cypher.models.user import UserRole


def requires(*checks):
    """Apply authorization predicates before the view runs.

    Each check receives the current user and the view's keyword arguments and
    raises an ApiError to deny. Checks may add loaded records to the keyword
    arguments. Nothing in the view executes until every check passed.
    """
    def decorator(f):
        @wraps(f)
        def decorated(current_user, *args, **kwargs):
            for check in checks:
                check(current_user, kwargs)
            return f(current_user, *args, **kwargs)
        return decorated
    return decorator


def is_creator(current_user, view_kwargs):
    # The role claim is authoritative for the token's lifetime
    if get_jwt().get('role') != UserRole.creator.value:
        raise AuthorizationError('Zugriff verweigert. Nur Creators dürfen Tracks verwalten.')


def is_owner(model, id_arg, inject, owner_attr='user_id', conceal=False,
             not_found_message='Nicht gefunden.'):
    """Build a check that loads ``model`` by the ``id_arg`` route value.

    Missing records are 404, foreign ones 403, or 404 with ``conceal`` so the
    record's existence does not leak. The record is handed to the view as
    ``inject``.
    """
    def check(current_user, view_kwargs):
        record = db.session.get(model, view_kwargs[id_arg])
        if record is None:
            raise NotFoundError(not_found_message)
        if getattr(record, owner_attr) != current_user.id:
            if conceal:
                raise NotFoundError(not_found_message)
            raise AuthorizationError('Zugriff verweigert. Du bist nicht der Besitzer.')
        view_kwargs[inject] = record
    return check

from sqlalchemy.dialects import postgresql, sqlite
from cypher.extensions.extension import db


def insert_ignore(model):
    """INSERT ... ON CONFLICT DO NOTHING on the model's table.

    ``rowcount`` of the executed statement tells whether a row was written.
    """
    dialect = db.session.get_bind().dialect.name
    if dialect == 'postgresql':
        return postgresql.insert(model.__table__).on_conflict_do_nothing()
    if dialect == 'sqlite':
        return sqlite.insert(model.__table__).on_conflict_do_nothing()
    raise NotImplementedError(f"insert_ignore is not supported on {dialect}")

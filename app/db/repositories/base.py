from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

# Dialectos con INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class BaseRepository:
    """
    Cada escritura es un upsert independiente con su propio commit.
    No hay transacciones que abarquen varias entidades.
    """

    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def _upsert(self, entity):
        """
        Upsert atómico por clave primaria: si dos sesiones escriben la misma
        fila a la vez, la última escritura gana en vez de fallar con
        IntegrityError como haría un SELECT + INSERT (Session.merge).

        De una entidad nueva solo se escriben las columnas asignadas, así que
        las que no se pasan toman su default al insertar y no se tocan al
        actualizar. De una entidad ya cargada se escriben todas.
        """
        model = type(entity)
        mapper = inspect(model)
        state = inspect(entity)

        if state.transient or state.pending:
            values = {
                attr.key: state.dict[attr.key]
                for attr in mapper.column_attrs
                if attr.key in state.dict
            }
            if state.pending:
                # Si no, el flush del commit intentaría un INSERT duplicado
                self.db.expunge(entity)
        else:
            values = {attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs}
            # Los cambios ya van en el INSERT, no hay que volcarlos otra vez en el commit
            self.db.expire(entity)

        keys = [column.name for column in mapper.primary_key]
        dialect = self.db.get_bind().dialect.name
        if dialect not in UPSERT_INSERTS:
            raise NotImplementedError(f"Upsert no soportado para el dialecto '{dialect}'")

        stmt = UPSERT_INSERTS[dialect](model).values(**values)
        update_values = {k: v for k, v in values.items() if k not in keys}
        if update_values:
            stmt = stmt.on_conflict_do_update(index_elements=keys, set_=update_values)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=keys)

        self.db.execute(stmt)
        self.commit()

        identity = tuple(values[k] for k in keys)
        return self.db.get(model, identity[0] if len(identity) == 1 else identity, populate_existing=True)

# sponsored_farm/database/layout.py

"""
Append-only storage layout.

Logic revisions are swapped in place over the same database, so every
table keeps the column order below forever. New columns may only be added
after the last frozen column (and then frozen here too); nothing is ever
inserted, renamed, reordered or dropped.
"""

import logging
from typing import Dict, List, Tuple

from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import Column, MetaData, inspect
from sqlalchemy.engine import Engine

from ..core.logging import FarmLogger, log_with_context
from ..types.model.errors import StorageLayoutError
from .base import LedgerBase
from . import tables  # noqa: F401  registers every table on the metadata


STORAGE_LAYOUT: Dict[str, Tuple[str, ...]] = {
    'ledger_state': (
        'id', 'initialized_version', 'owner', 'position_manager',
        'total_staked', 'farm_count', 'operation_count',
    ),
    'farms': (
        'id', 'reward_token', 'signer', 'active',
        'total_claimable', 'total_claimed', 'pool', 'reward_per_block',
    ),
    'positions': (
        'token_id', 'owner', 'staked_block', 'staked_at',
    ),
    'position_claims': (
        'token_id', 'farm_id', 'total_claimed',
    ),
    'ledger_events': (
        'id', 'content_id', 'operation', 'log_index', 'event_type',
        'block_number', 'timestamp', 'payload',
    ),
}


def _is_prefix(prefix: List[str], full: List[str]) -> bool:
    return len(prefix) <= len(full) and full[:len(prefix)] == prefix


class LayoutManager:
    """Validates and extends a database against the frozen layout."""

    def __init__(self, metadata: MetaData = LedgerBase.metadata,
                 layout: Dict[str, Tuple[str, ...]] = STORAGE_LAYOUT):
        self.metadata = metadata
        self.layout = layout
        self.logger = FarmLogger.get_logger('database.layout')

    def model_columns(self, table_name: str) -> List[str]:
        return [column.name for column in self.metadata.tables[table_name].columns]

    def check_model(self) -> None:
        """The ORM tables must start with the frozen columns, in order."""
        for table_name, frozen in self.layout.items():
            if table_name not in self.metadata.tables:
                raise StorageLayoutError(table_name, "table missing from model", list(frozen), [])
            columns = self.model_columns(table_name)
            if not _is_prefix(list(frozen), columns):
                raise StorageLayoutError(
                    table_name, "model columns are not an append-only extension of the frozen layout",
                    list(frozen), columns,
                )

    def database_columns(self, engine: Engine) -> Dict[str, List[str]]:
        inspector = inspect(engine)
        existing = set(inspector.get_table_names())
        return {
            name: [col['name'] for col in inspector.get_columns(name)]
            for name in self.metadata.tables
            if name in existing
        }

    def check_database(self, engine: Engine) -> Dict[str, List[str]]:
        """Return the trailing columns each existing table is missing.

        Raises StorageLayoutError when a table's stored columns are not a
        prefix of the model's columns.
        """
        self.check_model()
        pending: Dict[str, List[str]] = {}

        for table_name, stored in self.database_columns(engine).items():
            columns = self.model_columns(table_name)
            if not _is_prefix(stored, columns):
                log_with_context(self.logger, logging.ERROR, "Stored layout is incompatible",
                                 table=table_name, error=f"stored={stored}")
                raise StorageLayoutError(
                    table_name, "stored columns are not a prefix of the model columns",
                    columns, stored,
                )
            if len(stored) < len(columns):
                pending[table_name] = columns[len(stored):]

        return pending

    def sync(self, engine: Engine) -> Dict[str, List[str]]:
        """Create missing tables and append missing trailing columns in place."""
        pending = self.check_database(engine)
        self.metadata.create_all(engine)

        if not pending:
            return pending

        with engine.begin() as connection:
            operations = Operations(MigrationContext.configure(connection))
            for table_name, column_names in pending.items():
                table = self.metadata.tables[table_name]
                for column_name in column_names:
                    operations.add_column(table_name, self._appended_column(table.columns[column_name]))
                    log_with_context(self.logger, logging.INFO, "Appended column",
                                     table=table_name, column=column_name)

        return pending

    @staticmethod
    def _appended_column(model_column: Column) -> Column:
        # existing rows need a value: scalar defaults become server defaults, otherwise NULL
        default = model_column.default
        value = default.arg if default is not None and default.is_scalar else None
        if value is None:
            return Column(model_column.name, model_column.type, nullable=True)

        if isinstance(value, bool):
            server_default = "1" if value else "0"
        else:
            server_default = str(value)
        return Column(model_column.name, model_column.type, nullable=False, server_default=server_default)

"""Record client over the service's own database.

Speaks the request/response shapes the booking services were written
against: field projection through ``Fields``, ``ExactMatch`` conditions
through ``where``, ``pagingInfo`` for paging, and per-record ``results``
on writes.
"""

import logging
from datetime import date, datetime

from fastapi import Depends
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from booksmart.core import config
from booksmart.database import get_db
from booksmart.models.appointment import Appointment
from booksmart.models.bus_booking import BusBooking
from booksmart.models.train_booking import TrainBooking

logger = logging.getLogger(__name__)

TABLES = {
    "appointment1": Appointment,
    "bus_booking": BusBooking,
    "train_booking": TrainBooking,
}
ID_FIELD = "Id"
SYSTEM_FIELDS = frozenset({ID_FIELD, "CreatedOn"})
SUPPORTED_OPERATORS = frozenset({"ExactMatch"})


class RecordClientError(Exception):
    """Raised for requests the record store cannot interpret."""


class SqlRecordClient:
    def __init__(self, db: Session, tables: dict | None = None):
        self.db = db
        self.tables = tables or TABLES

    def _model(self, table_name: str):
        model = self.tables.get(table_name)
        if model is None:
            raise RecordClientError(f"Unknown table '{table_name}'.")
        return model

    @staticmethod
    def _field_keys(model) -> dict[str, str]:
        """Map remote field names (column names) to mapped attribute keys."""
        return {
            column.name: prop.key
            for prop in inspect(model).column_attrs
            for column in prop.columns
        }

    def _resolve_fields(self, model, names) -> dict[str, str]:
        field_keys = self._field_keys(model)
        if names is None:
            return field_keys
        unknown = [name for name in names if name not in field_keys]
        if unknown:
            raise RecordClientError(f"Unknown field(s) for {model.__tablename__}: {', '.join(unknown)}.")
        return {name: field_keys[name] for name in names}

    @staticmethod
    def _serialize(value):
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return value

    def _to_record(self, instance, fields: dict[str, str]) -> dict:
        return {name: self._serialize(getattr(instance, key)) for name, key in fields.items()}

    @staticmethod
    def _requested_names(requested) -> list[str] | None:
        if requested is None:
            return None
        if not isinstance(requested, list):
            raise RecordClientError("Fields must be a list of field entries.")
        try:
            names = [entry["Field"]["Name"] for entry in requested]
        except (KeyError, TypeError) as exc:
            raise RecordClientError("Every Fields entry needs the form {'Field': {'Name': ...}}.") from exc
        if not all(isinstance(name, str) for name in names):
            raise RecordClientError("Every Fields entry needs the form {'Field': {'Name': ...}}.")
        return names

    @staticmethod
    def _paging(paging) -> tuple[int, int]:
        if paging is None:
            paging = {}
        if not isinstance(paging, dict):
            raise RecordClientError("pagingInfo must be an object with limit and offset.")
        try:
            limit = int(paging.get("limit", config.RECORD_PAGE_LIMIT))
            offset = int(paging.get("offset", 0))
        except (TypeError, ValueError) as exc:
            raise RecordClientError("pagingInfo limit and offset must be integers.") from exc
        if limit < 1 or offset < 0:
            raise RecordClientError("pagingInfo needs a positive limit and a non-negative offset.")
        return limit, offset

    @staticmethod
    def _request_list(params, key: str, empty_message: str) -> list:
        items = params.get(key) if isinstance(params, dict) else None
        if items is None or (isinstance(items, list) and not items):
            raise RecordClientError(empty_message)
        if not isinstance(items, list):
            raise RecordClientError(f"{key} must be a list.")
        return items

    def _build_query(self, model, conditions):
        field_keys = self._field_keys(model)
        query = self.db.query(model)
        if conditions is None:
            conditions = []
        if not isinstance(conditions, list):
            raise RecordClientError("where must be a list of conditions.")
        for condition in conditions:
            if not isinstance(condition, dict):
                raise RecordClientError("Every where condition must be an object.")
            field_name = condition.get("fieldName")
            operator = condition.get("Operator", "ExactMatch")
            values = condition.get("values")
            if not isinstance(field_name, str) or field_name not in field_keys:
                raise RecordClientError(f"Unknown filter field '{field_name}'.")
            if operator not in SUPPORTED_OPERATORS:
                raise RecordClientError(f"Unsupported operator '{operator}'.")
            if not isinstance(values, list) or not values:
                raise RecordClientError(f"Filter on '{field_name}' needs a non-empty values list.")
            query = query.filter(getattr(model, field_keys[field_name]).in_(values))
        return query

    def _writable_values(self, model, record: dict) -> dict[str, object]:
        field_keys = self._field_keys(model)
        values = {}
        for name, value in record.items():
            if name in SYSTEM_FIELDS:
                continue
            if name not in field_keys:
                raise RecordClientError(f"Unknown field '{name}' for {model.__tablename__}.")
            values[field_keys[name]] = value
        return values

    def fetch_records(self, table_name: str, params: dict | None = None) -> dict:
        params = params or {}
        if not isinstance(params, dict):
            raise RecordClientError("fetch_records needs a request object.")
        model = self._model(table_name)
        fields = self._resolve_fields(model, self._requested_names(params.get("Fields")))
        limit, offset = self._paging(params.get("pagingInfo"))

        query = self._build_query(model, params.get("where"))
        total = query.count()
        rows = query.order_by(model.id.asc()).offset(offset).limit(limit).all()

        return {
            "success": True,
            "total": total,
            "data": [self._to_record(row, fields) for row in rows],
        }

    def create_record(self, table_name: str, params: dict) -> dict:
        model = self._model(table_name)
        records = self._request_list(params, "records", "create_record needs at least one record.")

        instances = []
        for record in records:
            if not isinstance(record, dict):
                raise RecordClientError("Every record must be an object.")
            if ID_FIELD in record:
                raise RecordClientError("Id is assigned by the record store.")
            instances.append(model(**self._writable_values(model, record)))

        try:
            self.db.add_all(instances)
            self.db.commit()
            for instance in instances:
                self.db.refresh(instance)
        except SQLAlchemyError:
            self.db.rollback()
            raise

        fields = self._field_keys(model)
        results = [{"success": True, "data": self._to_record(instance, fields)} for instance in instances]
        return {"success": True, "results": results}

    def update_record(self, table_name: str, params: dict) -> dict:
        model = self._model(table_name)
        records = self._request_list(params, "records", "update_record needs at least one record.")

        fields = self._field_keys(model)
        results = []
        try:
            for record in records:
                if not isinstance(record, dict):
                    raise RecordClientError("Every record must be an object.")
                record_id = record.get(ID_FIELD)
                if record_id is None:
                    raise RecordClientError("Every updated record needs an Id.")
                instance = self.db.get(model, record_id)
                if instance is None:
                    results.append({"success": False, "message": "Record not found."})
                    continue
                for key, value in self._writable_values(model, record).items():
                    setattr(instance, key, value)
                results.append({"success": True, "data": instance})
            self.db.commit()
        except (SQLAlchemyError, RecordClientError):
            self.db.rollback()
            raise

        for result in results:
            if result["success"]:
                self.db.refresh(result["data"])
                result["data"] = self._to_record(result["data"], fields)
        return {"success": all(result["success"] for result in results), "results": results}

    def delete_record(self, table_name: str, params: dict) -> dict:
        model = self._model(table_name)
        record_ids = self._request_list(params, "RecordIds", "delete_record needs at least one record id.")

        results = []
        try:
            for record_id in record_ids:
                instance = self.db.get(model, record_id)
                if instance is None:
                    results.append({"success": False, "message": "Record not found."})
                    continue
                self.db.delete(instance)
                results.append({"success": True})
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info("Deleted %d record(s) from %s", sum(r["success"] for r in results), table_name)
        return {"success": all(result["success"] for result in results), "results": results}


def get_record_client(db: Session = Depends(get_db)) -> SqlRecordClient:
    return SqlRecordClient(db)

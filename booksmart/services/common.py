from booksmart.core import config


class BookingServiceError(Exception):
    """Raised when the record store does not confirm a write."""


def build_fetch_params(
    fields: tuple[str, ...],
    filters: dict | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> dict:
    params = {
        "Fields": [{"Field": {"Name": name}} for name in fields],
        "pagingInfo": {
            "limit": limit or config.RECORD_PAGE_LIMIT,
            "offset": offset,
        },
    }
    if filters:
        params["where"] = [
            {"fieldName": field_name, "Operator": "ExactMatch", "values": [value]}
            for field_name, value in filters.items()
        ]
    return params


def first_result_data(response: dict | None, failure_message: str) -> dict:
    if not response or not response.get("success") or not response.get("results"):
        raise BookingServiceError(failure_message)

    result = response["results"][0]
    if not result.get("success", True) or result.get("data") is None:
        raise BookingServiceError(result.get("message") or failure_message)
    return result["data"]


def drop_unset(values: dict) -> dict:
    return {key: value for key, value in values.items() if value is not None}

"""Transaction endpoints: CRUD, filtered listing, export, and import."""

from __future__ import annotations

from flask import Response, jsonify, render_template, request

from ...constants import EXPENSE_CATEGORIES, INCOME_CATEGORIES, PAYMENT_METHODS
from ...errors import ErrorKind, Result, ValidationError
from ...extensions import get_context
from ...services.aggregation import TransactionFilter, apply_filters
from ...services.export_csv import export_filename, printable_report_context, transactions_to_csv
from ...services.import_csv import decode_csv, parse_transactions_csv
from ..common import (
    failure_response,
    item_response,
    list_response,
    login_required,
    mutation_response,
    payload,
)
from . import bp


def _filtered(owner_id: str) -> Result:
    result = get_context().transactions.list(owner_id)
    if result.is_kind(ErrorKind.NOT_FOUND):
        return Result.success([])
    if not result.ok:
        return result
    criteria = TransactionFilter.from_mapping(request.args)
    return Result.success(apply_filters(result.value or [], criteria))


@bp.get("/")
@login_required
def list_transactions(owner_id: str):
    return list_response(_filtered(owner_id), "transactions")


@bp.get("/options")
def options():
    return jsonify(
        {
            "income_categories": INCOME_CATEGORIES,
            "expense_categories": EXPENSE_CATEGORIES,
            "payment_methods": PAYMENT_METHODS,
        }
    )


@bp.post("/")
@login_required
def create_transaction(owner_id: str):
    result = get_context().transactions.create(owner_id, payload())
    return mutation_response(result, "add", status=201, id=result.value)


@bp.get("/<transaction_id>")
@login_required
def get_transaction(owner_id: str, transaction_id: str):
    return item_response(get_context().transactions.get(owner_id, transaction_id), "transaction")


@bp.put("/<transaction_id>")
@login_required
def replace_transaction(owner_id: str, transaction_id: str):
    result = get_context().transactions.replace(owner_id, transaction_id, payload())
    return mutation_response(result, "update")


@bp.delete("/<transaction_id>")
@login_required
def delete_transaction(owner_id: str, transaction_id: str):
    return mutation_response(get_context().transactions.delete(owner_id, transaction_id), "delete")


@bp.get("/export.csv")
@login_required
def export_csv(owner_id: str):
    result = _filtered(owner_id)
    if not result.ok:
        return failure_response(result, "fetch")
    return Response(
        transactions_to_csv(result.value or []),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={export_filename()}"},
    )


@bp.get("/export/print")
@login_required
def export_print(owner_id: str):
    result = _filtered(owner_id)
    if not result.ok:
        return failure_response(result, "fetch")
    return render_template(
        "exports/transactions_print.html", **printable_report_context(result.value or [])
    )


@bp.post("/import")
@login_required
def import_transactions(owner_id: str):
    upload = request.files.get("file")
    data = upload.read() if upload is not None else request.get_data()
    rejected: list[list[str]] = []
    try:
        records = parse_transactions_csv(decode_csv(data), rejected=rejected)
    except ValidationError as exc:
        return failure_response(Result.from_error(exc), "add")
    result = get_context().transactions.import_records(owner_id, records, malformed=rejected)
    if not result.ok:
        return failure_response(result, "add")
    return jsonify({"ok": True, **result.value.as_dict()}), 201

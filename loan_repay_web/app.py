import logging

import click
from flask import Flask, jsonify, render_template, request

from loan_repay.config import INCORRECT_PARAMETERS, WEB_HOST, WEB_PORT
from loan_repay.engine import calculate
from loan_repay.errors import InvalidInput
from loan_repay.formatter import result_lines, result_to_dict
from loan_repay.main import build_request_from_options

logger = logging.getLogger(__name__)

app = Flask(__name__)

FIELDS = ("principal", "payment", "periods", "interest", "type")


def _request_fields() -> dict:
    """Collect calculator fields from a JSON body, form data or query string."""
    source = request.get_json(silent=True) if request.is_json else None
    if not isinstance(source, dict):
        source = request.values
    fields = {}
    for name in FIELDS:
        value = source.get(name)
        fields[name] = None if value is None else str(value)
    return fields


def _run_calculation(fields: dict):
    loan_request = build_request_from_options(
        fields["principal"],
        fields["payment"],
        fields["periods"],
        fields["interest"],
        fields["type"],
    )
    return calculate(loan_request)


@app.route("/", methods=["GET", "POST"])
def index():
    lines = None
    error = None
    fields = {name: "" for name in FIELDS}

    if request.method == "POST":
        fields = _request_fields()
        try:
            lines = result_lines(_run_calculation(fields))
        except (InvalidInput, click.BadParameter) as exc:
            logger.info("Form calculation rejected: %s", exc)
            error = INCORRECT_PARAMETERS

    return render_template("index.html", fields=fields, lines=lines, error=error)


@app.route("/api/calculate", methods=["GET", "POST"])
def api_calculate():
    try:
        result = _run_calculation(_request_fields())
    except (InvalidInput, click.BadParameter) as exc:
        logger.info("API calculation rejected: %s", exc)
        return jsonify({"error": INCORRECT_PARAMETERS}), 400
    return jsonify(result_to_dict(result))


if __name__ == "__main__":
    print("Starting Loan Repayment Calculator web app...")
    app.run(host=WEB_HOST, port=WEB_PORT, debug=True)

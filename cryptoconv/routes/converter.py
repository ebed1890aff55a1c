# cryptoconv/routes/converter.py
from flask import Blueprint, current_app, jsonify, request
from cryptoconv.services.converter_view import PanelView
from cryptoconv.services.currencies import list_currencies
from cryptoconv.services.errors import ValidationError

converter_bp = Blueprint("converter", __name__)


def _view():
    # panel per request; the controller (and its cache) is shared
    view = PanelView()
    current_app.config["CONVERTER"].bind(view)
    return view


def _payload():
    # JSON from the page's fetch(), form data from a plain <form> post
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    return data if isinstance(data, dict) else {}


def _pair(data):
    from_currency, to_currency = data.get("from"), data.get("to")
    if not isinstance(from_currency, str) or not isinstance(to_currency, str):
        return None
    from_currency, to_currency = from_currency.strip(), to_currency.strip()
    if not from_currency or not to_currency:
        return None
    return from_currency, to_currency


@converter_bp.route("/api/currencies", methods=["GET"])
def currencies():
    return jsonify(list_currencies())


@converter_bp.route("/api/convert", methods=["POST"])
def convert():
    """
    Run one conversion through the shared controller.
    Body: {"from": "bitcoin", "to": "ethereum", "amount": "1.5"}
    """
    data = _payload()
    pair = _pair(data)
    if pair is None:
        return jsonify({"error": "missing from/to currency"}), 400

    view = _view()
    try:
        outcome = view.submit(pair[0], pair[1], data.get("amount"))
    except Exception as e:
        print(f"[ERROR] /api/convert failed: {e}")
        return jsonify({"error": str(e)}), 500

    panel = view.snapshot()
    if outcome.dropped:
        return jsonify({"error": "conversion already in progress", "panel": panel}), 409
    if isinstance(outcome.error, ValidationError):
        return jsonify({"error": outcome.error.reason, "panel": panel}), 400
    if outcome.error is not None:
        return jsonify({"error": "price fetch failed", "panel": panel}), 502

    r = outcome.result
    return jsonify({
        "panel": panel,
        "conversion": {
            "from": r.from_currency,
            "to": r.to_currency,
            "amount": r.amount,
            "from_price": r.from_price,
            "to_price": r.to_price,
            "usd_amount": r.usd_amount,
            "converted_amount": r.converted_amount,
        },
    })


@converter_bp.route("/api/selection", methods=["POST"])
def selection():
    """Refresh the amount label and price board for a new pair."""
    pair = _pair(_payload())
    if pair is None:
        return jsonify({"error": "missing from/to currency"}), 400

    view = _view()
    try:
        ok = view.select(pair[0], pair[1])
    except Exception as e:
        print(f"[ERROR] /api/selection failed: {e}")
        return jsonify({"error": str(e)}), 500
    return jsonify({"ok": ok, "panel": view.snapshot()})

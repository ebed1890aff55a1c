# cryptoconv/routes/quote.py
from flask import Blueprint, jsonify, request
from cryptoconv.services.quote import quote

quote_bp = Blueprint("quote", __name__)


@quote_bp.route("/api/quote/<coin_id>", methods=["GET"])
def coin_quote(coin_id: str):
    """
    USD value of ?amount= units of one coin.
    """
    q = quote(coin_id.strip(), request.args.get("amount", ""))
    body = {"message": q.message(), "price": q.price, "total": q.total}
    if not q.ok:
        return jsonify(body), 502
    return jsonify(body)

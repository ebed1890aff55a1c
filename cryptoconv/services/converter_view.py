# cryptoconv/services/converter_view.py
"""
What the converter needs from a UI, and the panel the web routes use.

The controller only talks to a ConverterView: it registers its handlers
through on_submit / on_selection_change and pushes text back through the
show_* / set_* calls. Any toolkit can sit behind it.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional, Protocol

SubmitHandler = Callable[[str, str, Any], Any]
SelectionHandler = Callable[[str, str], Any]


class ConverterView(Protocol):
    def on_submit(self, handler: SubmitHandler) -> None: ...
    def on_selection_change(self, handler: SelectionHandler) -> None: ...
    def set_loading(self, loading: bool) -> None: ...
    def clear_messages(self) -> None: ...
    def show_result(self, message: str) -> None: ...
    def show_error(self, message: str) -> None: ...
    def show_prices(self, from_line: str, to_line: str) -> None: ...
    def set_amount_label(self, text: str) -> None: ...


class PanelView:
    """
    Headless ConverterView backed by a dict. The Flask routes push user
    actions in through submit()/select() and hand snapshot() back as JSON.
    """

    def __init__(self):
        self._submit: Optional[SubmitHandler] = None
        self._select: Optional[SelectionHandler] = None
        self._lock = threading.Lock()
        self._panel: Dict[str, Any] = {
            "loading": False,
            "result": None,
            "error": None,
            "amount_label": None,
            "from_price": None,
            "to_price": None,
        }

    # ---- handler registration ----
    def on_submit(self, handler: SubmitHandler) -> None:
        self._submit = handler

    def on_selection_change(self, handler: SelectionHandler) -> None:
        self._select = handler

    # ---- user actions ----
    def submit(self, from_currency: str, to_currency: str, amount: Any) -> Any:
        if self._submit is None:
            raise RuntimeError("no submit handler registered")
        return self._submit(from_currency, to_currency, amount)

    def select(self, from_currency: str, to_currency: str) -> Any:
        if self._select is None:
            raise RuntimeError("no selection handler registered")
        return self._select(from_currency, to_currency)

    # ---- rendering ----
    def _set(self, **fields) -> None:
        with self._lock:
            self._panel.update(fields)

    def set_loading(self, loading: bool) -> None:
        self._set(loading=loading)

    def clear_messages(self) -> None:
        self._set(result=None, error=None)

    def show_result(self, message: str) -> None:
        self._set(result=message)

    def show_error(self, message: str) -> None:
        self._set(error=message)

    def show_prices(self, from_line: str, to_line: str) -> None:
        self._set(from_price=from_line, to_price=to_line)

    def set_amount_label(self, text: str) -> None:
        self._set(amount_label=text)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._panel)

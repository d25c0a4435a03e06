"""Dashboard panel endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

if TYPE_CHECKING:
    from pulse_dashboard.containers import AppContainer

router = APIRouter(tags=["panels"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/ip-info")
async def ip_info(request: Request) -> dict[str, object]:
    """Return the IP info panel state."""
    return _container(request).ip_info_view.state.to_dict()


@router.post("/ip-info/refresh")
async def refresh_ip_info(request: Request) -> dict[str, object]:
    """Show cached IP info and fetch a fresh copy."""
    state = await _container(request).ip_info_view.load()
    return state.to_dict()


@router.get("/products")
async def product_price(request: Request) -> dict[str, object]:
    """Return the product price panel state."""
    return _container(request).product_price_view.state.to_dict()


@router.post("/products/retry")
async def retry_product_price(request: Request) -> dict[str, object]:
    """Repeat the last product lookup."""
    state = await _container(request).product_price_view.retry()
    return state.to_dict()


@router.post("/products/{sku}/refresh")
async def refresh_product_price(sku: str, request: Request) -> dict[str, object]:
    """Show cached data for a SKU and fetch a fresh copy."""
    try:
        state = await _container(request).product_price_view.load(sku)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return state.to_dict()


@router.get("/ui", response_class=HTMLResponse)
async def dashboard_ui() -> HTMLResponse:
    """Minimal tabbed dashboard that consumes the panel API."""
    return HTMLResponse(_DASHBOARD_UI_HTML)


_DASHBOARD_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Pulse Dashboard</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      nav button { margin-right: 0.5rem; }
      section { display: none; margin-top: 1rem; }
      section.active { display: block; }
      .muted { color: #666; font-size: 0.9rem; }
      .error { color: #b00020; }
      pre { background: #f5f5f5; padding: 1rem; overflow-x: auto; }
    </style>
  </head>
  <body>
    <h1>Pulse Dashboard</h1>
    <nav>
      <button data-tab="ip">IP Info</button>
      <button data-tab="product">Product Price</button>
    </nav>
    <section id="ip" class="active">
      <button id="ip-refresh">Refresh</button>
      <div id="ip-status" class="muted"></div>
      <pre id="ip-data"></pre>
    </section>
    <section id="product">
      <form id="sku-form">
        <input id="sku" placeholder="SKU" />
        <button id="sku-submit" type="submit">Search</button>
      </form>
      <div id="product-status" class="muted"></div>
      <pre id="product-data"></pre>
    </section>
    <script>
      function render(prefix, state) {
        const status = document.getElementById(prefix + "-status");
        const parts = [];
        if (state.loading) parts.push("Loading...");
        if (state.refreshing) parts.push("Refreshing...");
        if (state.updated_ago && !state.loading) parts.push("Updated " + state.updated_ago);
        status.textContent = parts.join(" ");
        if (state.error) {
          status.innerHTML += ' <span class="error"></span> <button>Retry</button>';
          status.querySelector(".error").textContent = state.error;
          status.querySelector("button").onclick = () => (prefix === "ip"
            ? post("/ip-info/refresh", "ip")
            : post("/products/retry", "product"));
        }
        document.getElementById(prefix + "-data").textContent = state.data
          ? JSON.stringify(state.data, null, 2)
          : "";
      }
      async function post(path, prefix) {
        const response = await fetch(path, { method: "POST" });
        if (response.ok) render(prefix, await response.json());
      }
      async function show(path, prefix) {
        const response = await fetch(path);
        if (response.ok) render(prefix, await response.json());
      }
      document.querySelectorAll("nav button").forEach((button) => {
        button.onclick = () => {
          document.querySelectorAll("section").forEach((s) => s.classList.remove("active"));
          document.getElementById(button.dataset.tab).classList.add("active");
        };
      });
      document.getElementById("ip-refresh").onclick = () => post("/ip-info/refresh", "ip");
      document.getElementById("sku-form").onsubmit = async (event) => {
        event.preventDefault();
        const sku = document.getElementById("sku").value.trim();
        if (!sku) return;
        const submit = document.getElementById("sku-submit");
        submit.disabled = true;
        try {
          await post("/products/" + encodeURIComponent(sku) + "/refresh", "product");
        } finally {
          submit.disabled = false;
        }
      };
      show("/ip-info", "ip");
      show("/products", "product");
    </script>
  </body>
</html>
"""

"""Server-rendered storefront, checkout, dashboard and admin pages."""
import json
from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from growtools.backend.auth import SessionUser, get_optional_session
from growtools.backend.deps import get_db
from growtools.backend.models.bundle import Bundle
from growtools.backend.models.review import ReviewScreenshot
from growtools.backend.models.tool import Tool, ToolSubscription
from growtools.backend.models.user import User
from growtools.backend.services import catalog
from growtools.backend.services.access import list_active_subscriptions
from growtools.backend.services.site_config import SiteConfig, get_site_config

router = APIRouter()

_STYLE = """
    body { font-family: system-ui, sans-serif; margin: 0; color: #0f172a; background: #f8fafc; }
    header, main, footer { max-width: 960px; margin: 0 auto; padding: 1rem; }
    header a { margin-right: 1rem; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 1rem; }
    .card { background: #fff; border: 1px solid #e2e8f0; border-radius: 8px; padding: 1rem; }
    .price { font-weight: 600; }
    .contact a { margin-right: 1rem; }
    .gallery img { max-width: 100%; border-radius: 6px; }
"""

_META_PIXEL = """<script>
!function(f,b,e,v,n,t,s)
{if(f.fbq)return;n=f.fbq=function(){n.callMethod?
n.callMethod.apply(n,arguments):n.queue.push(arguments)};
if(!f._fbq)f._fbq=n;n.push=n;n.loaded=!0;n.version='2.0';
n.queue=[];t=b.createElement(e);t.async=!0;
t.src=v;s=b.getElementsByTagName(e)[0];
s.parentNode.insertBefore(t,s)}(window, document,'script',
'https://connect.facebook.net/en_US/fbevents.js');
fbq('init', %s);
fbq('track', 'PageView');
</script>"""


_ACCESS_SCRIPT = """<script>
(function () {
  let installed = false;
  const status = document.getElementById('access-status');
  window.addEventListener('message', (event) => {
    if (event.source !== window || event.origin !== window.location.origin) return;
    const data = event.data || {};
    if (data.type === 'GROWTOOLS_INSTALLED') {
      installed = true;
    } else if (data.type === 'GROWTOOLS_ACCESS_RESULT') {
      status.textContent = data.success ? 'Opening tool...' : (data.error || 'Could not open the tool');
    }
  });
  window.postMessage({type: 'GROWTOOLS_CHECK'}, window.location.origin);

  document.querySelectorAll('button[data-access-tool]').forEach((btn) => {
    btn.addEventListener('click', async () => {
      if (!installed) {
        status.textContent = 'Install the GrowTools extension to access this tool.';
        return;
      }
      const toolId = btn.dataset.accessTool;
      const r = await fetch('/api/cookies/' + encodeURIComponent(toolId), {credentials: 'same-origin'});
      const data = await r.json().catch(() => ({}));
      if (!r.ok) {
        status.textContent = data.error || 'Access denied';
        return;
      }
      window.postMessage(
        {type: 'GROWTOOLS_ACCESS', toolId: toolId, url: data.url, cookies: data.cookies},
        window.location.origin,
      );
    });
  });
})();
</script>"""


def _js_string(value) -> str:
    """JSON-encode a value for an inline <script> without letting it close the tag."""
    return json.dumps(value).replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def _price(value) -> str:
    return f"₹{float(value or 0):,.0f}"


def _contact_block(site: SiteConfig) -> str:
    links = [f'<a id="whatsapp-button" href="{escape(site.whatsapp_url)}" target="_blank" rel="noopener">WhatsApp</a>']
    if site.telegram.link:
        links.append(
            f'<a id="telegram-button" href="{escape(site.telegram.link)}" target="_blank" rel="noopener">Telegram</a>'
        )
    return f'<div class="contact">{"".join(links)}</div>'


def _layout(title: str, body: str, site: SiteConfig, session: SessionUser | None = None, status_code: int = 200) -> HTMLResponse:
    pixel = _META_PIXEL % _js_string(site.meta_pixel_id) if site.meta_pixel_id else ""
    if session is None:
        account = '<a href="/login">Sign in</a>'
    elif session.is_admin:
        account = '<a href="/admin">Admin</a>'
    else:
        account = '<a href="/dashboard">Dashboard</a>'
    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{escape(title)} | GrowTools</title>
  <style>{_STYLE}</style>
  {pixel}
</head>
<body>
  <header><a href="/tools"><strong>GrowTools</strong></a><a href="/tools">Tools</a><a href="/reviews">Reviews</a>{account}</header>
  <main>
{body}
  </main>
  <footer>{_contact_block(site)}</footer>
</body>
</html>"""
    return HTMLResponse(html, status_code=status_code)


def _not_found(site: SiteConfig, session: SessionUser | None = None) -> HTMLResponse:
    body = """<h1>404 - Not Found</h1>
<p>The page you are looking for does not exist or is no longer available.</p>
<a href="/tools">&larr; Back to Tools</a>"""
    return _layout("Not Found", body, site, session, status_code=404)


def _tool_card(t: Tool, href: str) -> str:
    return f"""<div class="card">
  <h3><a href="{escape(href)}">{escape(t.name)}</a></h3>
  <p>{escape(t.short_description or "")}</p>
  <p class="price">{_price(t.price_monthly)} / month</p>
</div>"""


@router.get("/login", response_class=HTMLResponse)
def login_page(
    callbackUrl: str = "/dashboard",
    site: SiteConfig = Depends(get_site_config),
):
    target = callbackUrl if callbackUrl.startswith("/") and not callbackUrl.startswith("//") else "/dashboard"
    body = f"""<h1>Sign in</h1>
<form id="login-form" class="card">
  <p><label>Email <input name="email" type="email" required></label></p>
  <p><label>Password <input name="password" type="password" required></label></p>
  <button type="submit">Sign in</button>
  <p id="login-error" style="color:#b91c1c"></p>
</form>
<script>
document.getElementById('login-form').addEventListener('submit', async (e) => {{
  e.preventDefault();
  const f = e.target;
  const r = await fetch('/api/auth/login', {{
    method: 'POST',
    headers: {{'Content-Type': 'application/json'}},
    body: JSON.stringify({{email: f.email.value, password: f.password.value}}),
  }});
  if (r.ok) {{ window.location.href = {_js_string(target)}; return; }}
  const data = await r.json().catch(() => ({{}}));
  document.getElementById('login-error').textContent = data.error || 'Sign in failed';
}});
</script>"""
    return _layout("Sign in", body, site)


@router.get("/tools", response_class=HTMLResponse)
def tools_page(
    db: Session = Depends(get_db),
    site: SiteConfig = Depends(get_site_config),
    session: SessionUser | None = Depends(get_optional_session),
):
    tools = catalog.list_active_tools(db)
    bundles = catalog.list_active_bundles(db)
    tool_cards = "".join(_tool_card(t, f"/tools/{t.slug}") for t in tools) or "<p>No tools available yet.</p>"
    bundle_cards = "".join(
        f"""<div class="card">
  <h3>{escape(b.name)}</h3>
  <p>{escape(", ".join(t.name for t in catalog.active_bundle_tools(b)))}</p>
  <p class="price">{_price(b.price_monthly)} / month</p>
  <a href="/checkout/bundle/{escape(b.id)}">Get bundle</a>
</div>"""
        for b in bundles
    )
    body = f'<h1>All Tools</h1>\n<div class="grid">{tool_cards}</div>'
    if bundle_cards:
        body += f'\n<h2>Bundles</h2>\n<div class="grid">{bundle_cards}</div>'
    return _layout("Tools", body, site, session)


@router.get("/tools/{slug}", response_class=HTMLResponse)
def tool_page(
    slug: str,
    db: Session = Depends(get_db),
    site: SiteConfig = Depends(get_site_config),
    session: SessionUser | None = Depends(get_optional_session),
):
    tool = catalog.get_active_tool_by_slug(db, slug)
    if not tool:
        return _not_found(site, session)
    body = f"""<h1>{escape(tool.name)}</h1>
<p><em>{escape(tool.category)}</em></p>
<p>{escape(tool.description)}</p>
<p class="price">{_price(tool.price_monthly)} / month</p>
<a href="/checkout/{escape(tool.id)}">Subscribe</a>"""
    return _layout(tool.name, body, site, session)


@router.get("/reviews", response_class=HTMLResponse)
def reviews_page(
    db: Session = Depends(get_db),
    site: SiteConfig = Depends(get_site_config),
    session: SessionUser | None = Depends(get_optional_session),
):
    shots = catalog.list_public_screenshots(db)
    items = "".join(
        f"""<figure class="card">
  <img src="{escape(s.image_url)}" alt="{escape(s.caption or "Customer review")}" loading="lazy">
  {f"<figcaption>{escape(s.caption)}</figcaption>" if s.caption else ""}
</figure>"""
        for s in shots
    )
    body = f'<h1>What our customers say</h1>\n<div class="grid gallery">{items or "<p>No reviews yet.</p>"}</div>'
    return _layout("Reviews", body, site, session)


@router.get("/checkout/bundle/{bundle_id}", response_class=HTMLResponse)
def bundle_checkout_page(
    bundle_id: str,
    db: Session = Depends(get_db),
    site: SiteConfig = Depends(get_site_config),
    session: SessionUser | None = Depends(get_optional_session),
):
    checkout = catalog.get_checkout_bundle(db, bundle_id)
    if not checkout:
        return _not_found(site, session)
    b = checkout.bundle
    rows = "".join(f"<li>{escape(t.name)}</li>" for t in checkout.tools)
    plans = [f'<li data-plan="monthly">Monthly: <span class="price">{_price(b.price_monthly)}</span></li>']
    if b.price_six_month:
        plans.append(f'<li data-plan="six_month">6 months: <span class="price">{_price(b.price_six_month)}</span></li>')
    if b.price_yearly:
        plans.append(f'<li data-plan="yearly">Yearly: <span class="price">{_price(b.price_yearly)}</span></li>')
    body = f"""<h1>Checkout: {escape(b.name)}</h1>
<div class="card" id="bundle-checkout">
  <p>{escape(b.description or "")}</p>
  {f"<p class='features'>{escape(b.features)}</p>" if b.features else ""}
  {f"<p class='audience'>Best for: {escape(b.target_audience)}</p>" if b.target_audience else ""}
  <h3>Included tools</h3>
  <ul>{rows}</ul>
  <h3>Plans</h3>
  <ul>{"".join(plans)}</ul>
</div>"""
    return _layout(f"Checkout {b.name}", body, site, session)


@router.get("/checkout/{tool_id}", response_class=HTMLResponse)
def tool_checkout_page(
    tool_id: str,
    db: Session = Depends(get_db),
    site: SiteConfig = Depends(get_site_config),
    session: SessionUser | None = Depends(get_optional_session),
):
    tool = catalog.get_active_tool(db, tool_id)
    if not tool:
        return _not_found(site, session)
    body = f"""<h1>Checkout: {escape(tool.name)}</h1>
<div class="card" id="tool-checkout">
  <p>{escape(tool.short_description or tool.description)}</p>
  <p class="price">{_price(tool.price_monthly)} / month</p>
</div>"""
    return _layout(f"Checkout {tool.name}", body, site, session)


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard_page(
    db: Session = Depends(get_db),
    site: SiteConfig = Depends(get_site_config),
    session: SessionUser | None = Depends(get_optional_session),
):
    subs = list_active_subscriptions(db, session.id) if session else []
    rows = "".join(
        f"""<div class="card" data-tool-id="{escape(s.tool_id)}">
  <h3>{escape(s.tool.name if s.tool else s.tool_id)}</h3>
  <p>{"Active until " + s.end_date.strftime("%d %b %Y") if s.end_date else "No end date"}</p>
  <button type="button" data-access-tool="{escape(s.tool_id)}">Access</button>
</div>"""
        for s in subs
    )
    body = f"""<h1>My Subscriptions</h1>
<p id="access-status" role="status"></p>
<div class="grid">{rows or '<p>No active subscriptions. <a href="/tools">Browse tools</a></p>'}</div>
<p><a href="/api/extension/download">Download the GrowTools extension</a></p>"""
    if rows:
        body += _ACCESS_SCRIPT
    return _layout("Dashboard", body, site, session)


@router.get("/admin", response_class=HTMLResponse)
def admin_page(
    db: Session = Depends(get_db),
    site: SiteConfig = Depends(get_site_config),
    session: SessionUser | None = Depends(get_optional_session),
):
    counts = {
        "Tools": db.execute(select(func.count()).select_from(Tool)).scalar_one(),
        "Bundles": db.execute(select(func.count()).select_from(Bundle)).scalar_one(),
        "Users": db.execute(select(func.count()).select_from(User)).scalar_one(),
        "Active subscriptions": db.execute(
            select(func.count()).select_from(ToolSubscription).where(ToolSubscription.status == "ACTIVE")
        ).scalar_one(),
        "Review screenshots": db.execute(select(func.count()).select_from(ReviewScreenshot)).scalar_one(),
    }
    cards = "".join(
        f'<div class="card"><h3>{escape(label)}</h3><p class="price">{value}</p></div>'
        for label, value in counts.items()
    )
    body = f"""<h1>Admin Dashboard</h1>
<div class="grid" id="admin-stats">{cards}</div>
<p><a href="/api/extension/admin-download">Download admin extension</a></p>"""
    return _layout("Admin", body, site, session)

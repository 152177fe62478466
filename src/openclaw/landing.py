from __future__ import annotations

import html
from string import Template
from typing import Any, Iterable

MAX_BULLETS = 6

_LANDING_TEMPLATE = Template(
    """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>$title</title>
  <style>
    body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Arial,sans-serif;margin:0;background:#0b0f17;color:#e8eefc;}
    .wrap{max-width:920px;margin:0 auto;padding:56px 20px;}
    .card{background:#121a2a;border:1px solid rgba(255,255,255,.08);border-radius:16px;padding:28px;}
    h1{font-size:40px;line-height:1.1;margin:0 0 14px;}
    p{font-size:18px;line-height:1.6;margin:0 0 18px;color:rgba(232,238,252,.86);}
    ul{margin:16px 0 0 20px;}
    li{margin:10px 0;font-size:18px;line-height:1.5;}
    .cta{display:inline-block;margin-top:22px;background:#4f7cff;color:white;text-decoration:none;padding:14px 18px;border-radius:12px;font-weight:700;}
    .small{margin-top:22px;font-size:13px;color:rgba(232,238,252,.6);}
  </style>
</head>
<body>
  <div class="wrap">
    <div class="card">
      <h1>$headline</h1>
      <p>$subheadline</p>
      <ul>
        $bullets
      </ul>
      <a class="cta" href="$cta_url">$cta_text</a>
      <div class="small">$disclaimer</div>
    </div>
  </div>
</body>
</html>"""
)


def escape(v: Any) -> str:
    return html.escape(str(v or ""), quote=True)


def render_landing_html(
    *,
    title: str,
    headline: str,
    subheadline: str,
    bullets: Iterable[Any],
    cta_text: str,
    cta_url: str,
    disclaimer: str,
) -> str:
    """Render a self-contained static landing page. Every field is escaped."""

    items = list(bullets or [])[:MAX_BULLETS]
    return _LANDING_TEMPLATE.substitute(
        title=escape(title),
        headline=escape(headline),
        subheadline=escape(subheadline),
        bullets="\n".join(f"<li>{escape(b)}</li>" for b in items),
        cta_text=escape(cta_text),
        cta_url=escape(cta_url),
        disclaimer=escape(disclaimer),
    )


def render_redirect_html(url: str) -> str:
    return (
        '<!doctype html><html><head><meta charset="utf-8" />'
        f'<meta http-equiv="refresh" content="0; url={escape(url)}" />'
        "</head><body>Redirecting...</body></html>"
    )

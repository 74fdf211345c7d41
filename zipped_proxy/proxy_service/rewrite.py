"""Textual rewrites applied to proxied HTML documents.

These are plain regular expressions, not an HTML parser, so malformed or
nested markup may slip through the same way it always has.
"""

import re

SCRIPT_RE = re.compile(r"<script[\s\S]*?>[\s\S]*?</script>", re.IGNORECASE)
CSP_META_RE = re.compile(
    r"""<meta[^>]*http-equiv=["']?Content-Security-Policy["']?[^>]*>""",
    re.IGNORECASE,
)

BODY_CLOSE = "</body>"
BADGE = (
    '<div style="position:fixed;right:8px;bottom:8px;z-index:9999;padding:6px 10px;'
    'background:rgba(0,0,0,0.6);color:white;border-radius:6px;font-size:12px;">ZIPPED</div>'
)


def strip_scripts(html: str) -> str:
    return SCRIPT_RE.sub("", html)


def strip_csp_meta(html: str) -> str:
    return CSP_META_RE.sub("", html)


def inject_badge(html: str) -> str:
    """Place the badge before the first </body>, or at the end if there is none."""
    if BODY_CLOSE in html:
        return html.replace(BODY_CLOSE, BADGE + BODY_CLOSE, 1)
    return html + BADGE


def rewrite_html(html: str) -> str:
    """Strip scripts and CSP meta tags, then add the badge."""
    html = strip_scripts(html)
    html = strip_csp_meta(html)
    return inject_badge(html)

"""Server-rendered HTML shells for the admin panel.

The pages are thin: data arrives over the page WebSocket (dashboard) or
the JSON API. The route guard decides who may see which page before any
of these render.
"""

from html import escape

_BASE_CSS = """
        * { box-sizing: border-box; }
        body {
            font-family: system-ui, sans-serif;
            margin: 0;
            min-height: 100vh;
            background: #0b0b0c;
            color: #e0e0e0;
            padding: 2rem 1rem;
        }
        .wrap { max-width: 960px; margin: 0 auto; }
        h1 { font-size: 1.75rem; font-weight: 600; color: #fff; margin: 0 0 0.25rem 0; }
        .muted { color: #777; font-size: 0.9rem; }
        .card {
            background: #111214;
            border: 1px solid #1f2023;
            padding: 1.25rem 1.5rem;
            margin-top: 1.25rem;
        }
        .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(200px, 1fr)); gap: 1rem; }
        .stat b { display: block; font-size: 1.5rem; color: #fff; }
        a.btn, button {
            display: inline-block;
            padding: 0.6rem 1.1rem;
            background: #fff;
            color: #000;
            border: 0;
            text-decoration: none;
            font-weight: 500;
            cursor: pointer;
        }
        input { padding: 0.55rem 0.7rem; background: #0b0b0c; color: #eee; border: 1px solid #333; width: 100%; }
        li { padding: 0.35rem 0; border-bottom: 1px solid #1a1a1a; list-style: none; }
        ul { padding: 0; margin: 0; }
"""


def _layout(title: str, body: str, script: str = "") -> str:
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{_BASE_CSS}</style>
</head>
<body>
    <div class="wrap">
{body}
    </div>
    {f"<script>{script}</script>" if script else ""}
</body>
</html>
""".strip()


def render_root_page(app_name: str) -> str:
    """Landing page linking to the dashboard and the API docs."""
    body = f"""
        <h1>{escape(app_name)}</h1>
        <p class="muted">Mr Cars administration panel.</p>
        <section class="card">
            <p>Sign in to manage listings, orders, inquiries and notifications.</p>
            <a href="/dashboard" class="btn">Open dashboard</a>
            <a href="/docs" class="btn">API docs</a>
        </section>
"""
    return _layout(app_name, body)


def render_login_page(app_name: str) -> str:
    """Login shell plus the password reset form (POST /api/v1/auth/reset-password)."""
    body = f"""
        <h1>Sign in</h1>
        <p class="muted">{escape(app_name)} · sign in with your administrator account.</p>
        <section class="card">
            <h2>Forgot your password?</h2>
            <form id="reset">
                <input type="email" name="email" placeholder="you@example.com" required>
                <p><button type="submit">Send reset link</button></p>
            </form>
            <p id="reset-status" class="muted"></p>
        </section>
"""
    script = """
        document.getElementById('reset').addEventListener('submit', async function (e) {
            e.preventDefault();
            var out = document.getElementById('reset-status');
            var resp = await fetch('/api/v1/auth/reset-password', {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify({email: e.target.email.value})
            });
            var data = await resp.json();
            out.textContent = resp.ok ? 'Check your email for the reset link.' : data.message;
        });
"""
    return _layout(f"Sign in · {app_name}", body, script)


def render_dashboard_page(app_name: str) -> str:
    """Dashboard shell; content is filled from /api/v1/ws/dashboard snapshots."""
    body = f"""
        <h1>Dashboard</h1>
        <p class="muted">{escape(app_name)} · <span id="status">loading…</span>
            <button id="refresh" type="button">Refresh</button></p>
        <section class="card"><div class="grid" id="summary"></div></section>
        <section class="card"><h2>Recent activity</h2><ul id="activity"></ul></section>
"""
    script = """
        (function () {
            var proto = window.location.protocol === 'https:' ? 'wss://' : 'ws://';
            var ws = new WebSocket(proto + window.location.host + '/api/v1/ws/dashboard');
            function text(tag, value) {
                var el = document.createElement(tag);
                el.textContent = value;
                return el;
            }
            ws.onmessage = function (event) {
                var msg = JSON.parse(event.data);
                if (msg.type !== 'snapshot') return;
                document.getElementById('status').textContent = msg.error ? 'error: ' + msg.error : msg.status;
                var summary = document.getElementById('summary');
                summary.replaceChildren();
                Object.entries(msg.data.summary).forEach(function (kv) {
                    var div = text('div', kv[0].replace(/_/g, ' '));
                    div.className = 'stat';
                    div.prepend(text('b', kv[1]));
                    summary.appendChild(div);
                });
                var feed = document.getElementById('activity');
                feed.replaceChildren();
                msg.data.activity.forEach(function (a) {
                    feed.appendChild(text('li', a.user_name + ' ' + a.action + (a.target ? ' ' + a.target : '')));
                });
            };
            document.getElementById('refresh').onclick = function () {
                ws.send(JSON.stringify({action: 'refresh'}));
            };
        })();
"""
    return _layout(f"Dashboard · {app_name}", body, script)

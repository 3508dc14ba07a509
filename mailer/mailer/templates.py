"""HTML email templates.

Templates are rendered with autoescaping enabled, so names, links and
titles are always HTML-escaped. `message` bodies are HTML fragments
supplied by our own services and are inserted as-is.
"""

from datetime import datetime
from typing import Any, Final

from jinja2 import DictLoader, Environment, select_autoescape

COLORS: Final = {
    "primary": "#f97316",
    "primary_dark": "#ea580c",
    "background": "#09090b",
    "container": "#18181b",
    "border": "#27272a",
    "text": "#e4e4e7",
    "text_muted": "#a1a1aa",
    "text_dark": "#71717a",
    "white": "#ffffff",
    "black": "#000000",
}

BASE = """\
<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <title>{{ subject }}</title>
  <!--[if mso]>
  <style type="text/css">
    table { border-collapse: collapse; }
    .button { padding: 14px 32px !important; }
  </style>
  <![endif]-->
</head>
<body style="margin: 0; padding: 0; background-color: {{ c.background }}; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;">
  <table role="presentation" width="100%" border="0" cellspacing="0" cellpadding="0" style="background-color: {{ c.background }};">
    <tr>
      <td align="center" style="padding: 40px 20px;">
        <table role="presentation" width="100%" style="max-width: 600px; background-color: {{ c.container }}; border-radius: 16px; overflow: hidden; border: 1px solid {{ c.border }};">
          <!-- Header -->
          <tr>
            <td align="center" style="padding: 40px 40px 20px 40px; background: linear-gradient(180deg, {{ c.container }} 0%, transparent 100%);">
              <table role="presentation" border="0" cellspacing="0" cellpadding="0">
                <tr>
                  <td align="center">
                    <div style="width: 64px; height: 64px; background: linear-gradient(135deg, {{ c.primary }} 0%, {{ c.primary_dark }} 100%); border-radius: 16px; display: flex; align-items: center; justify-content: center;">
                      <span style="font-size: 32px; font-weight: bold; color: {{ c.white }};">M</span>
                    </div>
                  </td>
                </tr>
                <tr>
                  <td align="center" style="padding-top: 16px;">
                    <h1 style="margin: 0; font-size: 24px; font-weight: 700; color: {{ c.white }};">MyCAD</h1>
                  </td>
                </tr>
              </table>
            </td>
          </tr>
          <tr>
            <td align="center" style="padding: 0 40px;">
              <h2 style="margin: 0 0 24px 0; font-size: 20px; font-weight: 600; color: {{ c.white }};">{{ title }}</h2>
            </td>
          </tr>
          <!-- Content -->
          <tr>
            <td style="padding: 0 40px 40px 40px;">
              {%- block content %}{% endblock %}
            </td>
          </tr>
          <!-- Footer -->
          <tr>
            <td style="background-color: {{ c.black }}; padding: 24px 40px; text-align: center;">
              <p style="margin: 0 0 8px 0; font-size: 12px; color: {{ c.text_dark }};">
                &copy; {{ year }} MyCAD. {{ t.footer.copyright }}
              </p>
              <p style="margin: 0; font-size: 11px; color: {{ c.text_dark }};">
                {{ t.footer.automated }}
              </p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""

MACROS = """\
{% macro action_button(url, text) -%}
<table role="presentation" border="0" cellspacing="0" cellpadding="0" style="margin: 24px auto;">
  <tr>
    <td align="center" style="border-radius: 8px; background-color: {{ c.primary }};">
      <a href="{{ url }}" target="_blank" class="button" style="display: inline-block; padding: 14px 32px; font-size: 16px; font-weight: 600; color: {{ c.black }}; text-decoration: none; border-radius: 8px;">
        {{ text }}
      </a>
    </td>
  </tr>
</table>
<p style="margin: 0; font-size: 13px; color: {{ c.text_dark }}; text-align: center;">
  <a href="{{ url }}" style="color: {{ c.primary }}; text-decoration: none; word-break: break-all;">{{ url }}</a>
</p>
{%- endmacro %}

{% macro lead(text) -%}
<p style="margin: 0 0 16px 0; font-size: 16px; line-height: 1.6; color: {{ c.text }}; text-align: center;">
  {{ text }}
</p>
{%- endmacro %}

{% macro paragraph(text) -%}
<p style="margin: 0 0 24px 0; font-size: 16px; line-height: 1.6; color: {{ c.text_muted }}; text-align: center;">
  {{ text }}
</p>
{%- endmacro %}

{% macro greeting(word, name) -%}
{{ lead(word ~ (" " ~ name if name else "") ~ ",") }}
{%- endmacro %}
"""

VERIFICATION = """\
{% extends "base.html" %}
{% import "macros.html" as m with context %}
{% block content %}
{{ m.lead(t.verification.welcome ~ (", " ~ name if name else "") ~ "!") }}
{{ m.paragraph(t.verification.content) }}
{{ m.action_button(link, t.verification.button) }}
{% endblock %}
"""

PASSWORD_RESET = """\
{% extends "base.html" %}
{% import "macros.html" as m with context %}
{% block content %}
{{ m.greeting(t.password_reset.greeting, name) }}
{{ m.paragraph(t.password_reset.content) }}
{{ m.action_button(link, t.password_reset.button) }}
<p style="margin: 24px 0 0 0; font-size: 14px; color: {{ c.text_dark }}; text-align: center;">
  ⏱️ {{ t.password_reset.expiry }}
</p>
{% endblock %}
"""

REPORT = """\
{% extends "base.html" %}
{% import "macros.html" as m with context %}
{% block content %}
{{ m.greeting(t.report.greeting, name) }}
{{ m.paragraph(t.report.content) }}
<table role="presentation" width="100%" border="0" cellspacing="0" cellpadding="0" style="margin-bottom: 24px;">
  <tr>
    <td style="background-color: {{ c.background }}; border: 1px solid {{ c.border }}; border-radius: 8px; padding: 16px; text-align: center;">
      <p style="margin: 0; font-size: 14px; color: {{ c.text_muted }};">
        📄 <strong style="color: {{ c.text }};">{{ report_name }}</strong>
      </p>
    </td>
  </tr>
</table>
{{ m.action_button(link, t.report.button) }}
{% endblock %}
"""

NOTIFICATION = """\
{% extends "base.html" %}
{% import "macros.html" as m with context %}
{% block content %}
{{ m.greeting(t.notification.greeting, name) }}
<div style="margin: 0 0 24px 0; font-size: 16px; line-height: 1.6; color: {{ c.text_muted }}; text-align: center;">
  {{ message|safe }}
</div>
{% if action_url and action_text %}{{ m.action_button(action_url, action_text) }}{% endif %}
{% endblock %}
"""

SIMPLE = """\
{% extends "base.html" %}
{% block content %}
<div style="font-size: 16px; line-height: 1.6; color: {{ c.text_muted }}; text-align: center;">
  {{ message|safe }}
</div>
{% endblock %}
"""

TEMPLATES: Final = {
    "base.html": BASE,
    "macros.html": MACROS,
    "verification.html": VERIFICATION,
    "password-reset.html": PASSWORD_RESET,
    "report.html": REPORT,
    "notification.html": NOTIFICATION,
    "simple.html": SIMPLE,
}

env = Environment(
    loader=DictLoader(TEMPLATES),
    autoescape=select_autoescape(default=True, default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_template(name: str, /, **context: Any) -> str:
    context.setdefault("c", COLORS)
    context.setdefault("year", datetime.now().year)
    return env.get_template(name).render(**context).strip()

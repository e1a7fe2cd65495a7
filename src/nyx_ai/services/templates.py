"""HTML templates for notification emails and the admin dashboards."""

from typing import Any

from jinja2 import BaseLoader, Environment

env = Environment(loader=BaseLoader(), autoescape=True)

_EMAIL_SHELL_OPEN = (
    '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; '
    'background: #0a0a0f; color: #e0e0e0; padding: 40px 20px; border-radius: 10px;">'
)

WAITLIST_WELCOME = _EMAIL_SHELL_OPEN + """
  <div style="text-align: center; margin-bottom: 30px;">
    <h1 style="color: #667eea; margin: 0;">Welcome to Nyx AI!</h1>
    <p style="color: #888; margin-top: 10px;">Your AI-powered study companion</p>
  </div>
  <p style="font-size: 16px; line-height: 1.6;">Hi {{ name }}!</p>
  <p style="font-size: 16px; line-height: 1.6;">Thanks for joining the waitlist! You're now part of an
  exclusive group of early adopters who will get first access to our AI-powered tools for students.</p>
  <div style="background: #1a1a2e; padding: 20px; border-radius: 8px; margin: 30px 0;">
    <h2 style="color: #667eea; margin-top: 0; font-size: 18px;">What's included:</h2>
    <ul style="color: #e0e0e0; padding-left: 20px;">
      <li>AI Summarizer - Condense long texts</li>
      <li>Code Explainer - Understand programming</li>
      <li>Flashcard Generator - Study smarter</li>
      <li>Grammar Checker - Perfect your writing</li>
      <li>And 20+ more tools!</li>
    </ul>
  </div>
  <div style="background: #16213e; padding: 20px; border-radius: 8px; margin: 30px 0; text-align: center;">
    <p style="margin: 0;">Your spot on the waitlist:</p>
    <div style="font-size: 36px; font-weight: bold; color: #667eea; margin: 10px 0;">#{{ position }}</div>
    <p style="color: #888; font-size: 14px; margin: 0;">Out of {{ total }} early adopters</p>
  </div>
  <p style="color: #888; font-size: 12px; text-align: center;">
    You received this because you joined the Nyx AI waitlist.<br>
    If this wasn't you, please ignore this email.
  </p>
</div>
"""

WAITLIST_NOTIFICATION = _EMAIL_SHELL_OPEN + """
  <h1 style="color: #667eea; text-align: center; margin-bottom: 30px;">New User Joined!</h1>
  <div style="background: #1a1a2e; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <p><strong style="color: #667eea;">Email:</strong> {{ entry.email }}</p>
    <p><strong style="color: #667eea;">Name:</strong> {{ entry.name }}</p>
    <p><strong style="color: #667eea;">Time:</strong> {{ entry.joined_at.strftime("%Y-%m-%d %H:%M:%S %Z") }}</p>
    <p><strong style="color: #667eea;">Total Signups:</strong> {{ total }}</p>
  </div>
  <div style="background: #16213e; padding: 20px; border-radius: 8px;">
    <h3 style="color: #667eea; margin-top: 0; font-size: 16px;">Recent signups:</h3>
    <ul style="margin-top: 10px; padding-left: 20px;">
      {% for user in recent %}
      <li>{{ user.email }} - {{ user.joined_at.strftime("%Y-%m-%d %H:%M") }}</li>
      {% endfor %}
    </ul>
  </div>
</div>
"""

CONTACT_CONFIRMATION = _EMAIL_SHELL_OPEN + """
  <h1 style="color: #667eea; text-align: center;">We got your message!</h1>
  <p style="font-size: 16px; line-height: 1.6;">Hi {{ entry.name }},</p>
  <p style="font-size: 16px; line-height: 1.6;">Thanks for reaching out to Nyx AI. Our team will get back
  to you as soon as possible.</p>
  <div style="background: #1a1a2e; padding: 20px; border-radius: 8px; margin: 20px 0;">
    {% if entry.subject %}<p><strong style="color: #667eea;">Subject:</strong> {{ entry.subject }}</p>{% endif %}
    <p style="white-space: pre-wrap;">{{ entry.message }}</p>
  </div>
</div>
"""

CONTACT_NOTIFICATION = _EMAIL_SHELL_OPEN + """
  <h1 style="color: #667eea; text-align: center; margin-bottom: 30px;">New Contact Message</h1>
  <div style="background: #1a1a2e; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <p><strong style="color: #667eea;">Name:</strong> {{ entry.name }}</p>
    <p><strong style="color: #667eea;">Email:</strong> {{ entry.email }}</p>
    {% if entry.phone %}<p><strong style="color: #667eea;">Phone:</strong> {{ entry.phone }}</p>{% endif %}
    {% if entry.subject %}<p><strong style="color: #667eea;">Subject:</strong> {{ entry.subject }}</p>{% endif %}
    <p><strong style="color: #667eea;">Time:</strong> {{ entry.submitted_at.strftime("%Y-%m-%d %H:%M:%S %Z") }}</p>
  </div>
  <div style="background: #16213e; padding: 20px; border-radius: 8px; white-space: pre-wrap;">{{ entry.message }}</div>
</div>
"""

DASHBOARD = """<!DOCTYPE html>
<html>
<head>
  <title>Nyx AI - {{ title }}</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
           background: #0a0a0f; color: #e0e0e0; padding: 40px 20px; }
    .container { max-width: 1000px; margin: 0 auto; }
    h1 { color: #667eea; margin-bottom: 20px; }
    .stats { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
             gap: 20px; margin-bottom: 40px; }
    .stat-card { background: #1a1a2e; padding: 20px; border-radius: 10px; border: 1px solid #2a2a3e; }
    .stat-number { font-size: 32px; font-weight: bold; color: #667eea; }
    .stat-label { color: #888; margin-top: 5px; }
    table { width: 100%; border-collapse: collapse; background: #1a1a2e; border-radius: 10px;
            overflow: hidden; border: 1px solid #2a2a3e; }
    th { background: #16213e; color: #667eea; font-weight: 600; padding: 15px; text-align: left; }
    td { padding: 12px 15px; border-bottom: 1px solid #2a2a3e; vertical-align: top; }
    tr:last-child td { border-bottom: none; }
    .badge { background: #667eea20; color: #667eea; padding: 4px 8px; border-radius: 4px;
             font-size: 12px; border: 1px solid #667eea40; }
    .export-btn { background: #667eea; color: white; border: none; padding: 10px 20px;
                  border-radius: 5px; cursor: pointer; font-size: 14px; margin-bottom: 20px; }
    .export-btn:hover { background: #5a6fd8; }
  </style>
</head>
<body>
  <div class="container">
    <h1>Nyx AI {{ title }}</h1>
    <div class="stats">
      {% for label, value in stats %}
      <div class="stat-card">
        <div class="stat-number">{{ value }}</div>
        <div class="stat-label">{{ label }}</div>
      </div>
      {% endfor %}
    </div>
    <button class="export-btn" onclick="exportCSV()">Export to CSV</button>
    <table>
      <thead>
        <tr><th>#</th>{% for column in columns %}<th>{{ column }}</th>{% endfor %}</tr>
      </thead>
      <tbody>
        {% for row in rows %}
        <tr>
          <td><span class="badge">{{ loop.index }}</span></td>
          {% for cell in row %}<td>{{ cell }}</td>{% endfor %}
        </tr>
        {% endfor %}
      </tbody>
    </table>
  </div>
  <script>
    function exportCSV() {
      const columns = {{ columns | tojson }};
      const rows = {{ rows | tojson }};
      const quote = (value) => '"' + String(value).replace(/"/g, '""') + '"';
      const csv = [columns.join(',')].concat(rows.map((row) => row.map(quote).join(',')));
      const blob = new Blob([csv.join('\\n')], { type: 'text/csv' });
      const url = window.URL.createObjectURL(blob);
      const a = document.createElement('a');
      a.href = url;
      a.download = {{ export_name | tojson }};
      a.click();
    }
  </script>
</body>
</html>
"""


def render(template: str, **context: Any) -> str:
    return env.from_string(template).render(**context)

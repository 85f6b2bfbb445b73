VIGNETTE_HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Creating a BDS Finding ADaM: {{ dataset }}</title>
<style>
body { font-family: -apple-system, "Segoe UI", Helvetica, Arial, sans-serif; margin: 2rem auto; max-width: 70rem; color: #222; }
h1 { border-bottom: 2px solid #ddd; padding-bottom: .3rem; }
h2 { margin-top: 2.5rem; }
pre { background: #f6f8fa; padding: 1rem; overflow-x: auto; border-radius: 4px; }
table.preview { border-collapse: collapse; font-size: .85rem; margin: .5rem 0; }
table.preview th, table.preview td { border: 1px solid #ddd; padding: .25rem .5rem; text-align: left; }
table.preview th { background: #f0f0f0; }
.meta { color: #666; font-size: .85rem; }
.warning { color: #8a6d00; }
.error { color: #b00020; }
.ok { color: #1b7f3b; }
</style>
</head>
<body>
<h1>Creating a BDS Finding ADaM: {{ dataset }}</h1>
<p>This document shows how to create the {{ dataset }} analysis dataset
({{ description }}) from the SDTM {{ domain }} domain and ADSL. Source data:
{{ source }}. Generated {{ timestamp }}.</p>
<ul>
{% for step in steps %}
  <li><a href="#{{ step.key }}">{{ step.title }}</a></li>
{% endfor %}
  <li><a href="#integrity">Data integrity checks</a></li>
</ul>
{% for step in steps %}

<h2 id="{{ step.key }}">{{ loop.index }}. {{ step.title }}</h2>
<p>{{ step.narrative }}</p>
<pre><code>{{ step.code }}</code></pre>
{% if step.applied %}
<p class="meta">{{ step.message }}: {{ step.input_rows }} &rarr; {{ step.output_rows }} rows{% if step.added_columns %}, added {{ step.added_columns | join(", ") }}{% endif %}.</p>
{% else %}
<p class="meta">Skipped: {{ step.message }}.</p>
{% endif %}
{% for warning in step.warnings %}
<p class="warning">Warning: {{ warning }}</p>
{% endfor %}
{% for error in step.errors %}
<p class="error">Error: {{ error }}</p>
{% endfor %}
{% if step.key == "parameters" and lookup_html %}
<p>Parameter lookup:</p>
{{ lookup_html | safe }}
{% endif %}
{{ step.preview_html | safe }}
{% endfor %}

<h2 id="integrity">Data integrity checks</h2>
{% if integrity is none %}
<p class="meta">Not run.</p>
{% else %}
<p>Source rows: {{ integrity.source_rows }}. Enriched rows: {{ integrity.enriched_rows }}.
Lookup rows: {{ integrity.lookup_rows }}.</p>
{% if integrity.passed %}
<p class="ok">All checks passed.</p>
{% else %}
<ul>
{% for issue in integrity.issues %}
  <li class="error">{{ issue.check }}: {{ issue.message }}</li>
{% endfor %}
</ul>
{% endif %}
{% endif %}
</body>
</html>
"""

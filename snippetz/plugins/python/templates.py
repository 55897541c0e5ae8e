"""
Jinja2 templates shared by the Python client plugins.

Values reach the templates as data; the literal filters of the engine do
all quoting. Body values are only passed when the request has them.
"""

from ...core.templates import create_template_engine

ASSIGNMENTS_TEMPLATE = """\
url = {{ url | pystr }}

{% if params %}
params = {{ params | pypairs(indent) }}

{% endif %}
{% if headers %}
headers = {{ headers | pydict(indent) }}

{% endif %}
{% if cookies %}
cookies = {{ cookies | pydict(indent) }}

{% endif %}
{% if payload is defined %}
payload = {{ payload | pyliteral(indent) }}

{% elif payload_code is defined %}
payload = {{ payload_code }}

{% endif %}
{% if files is defined %}
files = {{ files }}

{% endif %}
"""

SYNC_TEMPLATE = """\
{% for line in imports %}
{{ line }}
{% endfor %}

{% include "assignments.py.j2" %}
response = {{ call }}({{ args | join(", ") }})

print(response.text)
"""

ASYNC_TEMPLATE = """\
{% for line in imports %}
{{ line }}
{% endfor %}

{% include "assignments.py.j2" %}

async def main():
{{ indent }}async with httpx.AsyncClient() as client:
{{ indent }}{{ indent }}response = await {{ call }}({{ args | join(", ") }})

{{ indent }}print(response.text)


asyncio.run(main())
"""

TEMPLATES = {
    "assignments.py.j2": ASSIGNMENTS_TEMPLATE,
    "sync_client.py.j2": SYNC_TEMPLATE,
    "async_client.py.j2": ASYNC_TEMPLATE,
}

# Shared by all Python plugins; the environment is never modified after import
engine = create_template_engine(TEMPLATES)

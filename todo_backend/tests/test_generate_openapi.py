import json

from src.todo_api.generate_openapi import generate_openapi


def test_generate_openapi_writes_schema(tmp_path):
    out = tmp_path / "interfaces" / "openapi.json"

    path = generate_openapi(str(out))

    assert path == str(out)
    schema = json.loads(out.read_text(encoding="utf-8"))
    assert "/todos" in schema["paths"]
    assert "/todos/{todo_id}" in schema["paths"]
    assert {t["name"] for t in schema["tags"]} >= {"health", "todos"}
    # Response models are published with their wire (camelCase) names
    todo_props = schema["components"]["schemas"]["TodoResponse"]["properties"]
    assert "createdAt" in todo_props and "modifiedAt" in todo_props

import json

import pytest

from codegenai.utils.audit import JsonlAuditor


pytestmark = pytest.mark.anyio


async def test_records_are_appended_as_json_lines(tmp_path):
	path = tmp_path / "logs" / "codegen.jsonl"
	auditor = JsonlAuditor(str(path))
	assert auditor.enabled
	await auditor.log({"type": "submission", "outcome": "accepted"})
	await auditor.log({"type": "generation_error", "error_type": "TimeoutError"})
	lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
	assert [r["type"] for r in lines] == ["submission", "generation_error"]
	assert all("ts" in r for r in lines)


async def test_unconfigured_auditor_writes_nothing(tmp_path):
	auditor = JsonlAuditor()
	assert not auditor.enabled
	await auditor.log({"type": "submission"})
	auditor.configure(None)
	assert list(tmp_path.iterdir()) == []

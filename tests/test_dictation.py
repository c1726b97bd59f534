import pytest

from codegenai.services.conversation import PendingInput
from codegenai.services.dictation import (
	UNSUPPORTED_NOTICE, DictationBridge, DictationUnavailable, RemoteRecognizer, UnavailableDictationBridge,
	create_dictation_bridge,
)


pytestmark = pytest.mark.anyio


class RecordingRecognizer:
	def __init__(self) -> None:
		self.calls = []

	async def start(self) -> None:
		self.calls.append("start")

	async def stop(self) -> None:
		self.calls.append("stop")


def test_probe_without_recognizer_yields_unavailable_bridge():
	bridge = create_dictation_bridge(None, PendingInput())
	assert isinstance(bridge, UnavailableDictationBridge)
	assert bridge.available is False
	assert bridge.is_recording is False


def test_probe_with_recognizer_yields_working_bridge():
	bridge = create_dictation_bridge(RecordingRecognizer(), PendingInput())
	assert isinstance(bridge, DictationBridge)
	assert bridge.available is True


async def test_unavailable_toggle_raises_notice():
	bridge = UnavailableDictationBridge()
	with pytest.raises(DictationUnavailable) as info:
		await bridge.toggle()
	assert info.value.notice == UNSUPPORTED_NOTICE


async def test_toggle_flips_recording_and_drives_engine():
	recognizer = RecordingRecognizer()
	bridge = DictationBridge(recognizer, PendingInput())
	assert await bridge.toggle() is True
	assert bridge.is_recording
	assert await bridge.toggle() is False
	assert recognizer.calls == ["start", "stop"]


async def test_recording_flag_flips_before_engine_confirms():
	seen = []

	class SlowRecognizer(RecordingRecognizer):
		async def start(self) -> None:
			seen.append(bridge.is_recording)

	bridge = DictationBridge(SlowRecognizer(), PendingInput())
	await bridge.toggle()
	assert seen == [True]


async def test_on_end_resets_recording():
	bridge = DictationBridge(RecordingRecognizer(), PendingInput())
	await bridge.toggle()
	bridge.on_end()
	assert bridge.is_recording is False
	# a new activation starts again rather than stopping
	await bridge.toggle()
	assert bridge.is_recording is True


def test_results_are_space_joined_onto_typed_text():
	pending = PendingInput("please")
	bridge = DictationBridge(RecordingRecognizer(), pending)
	bridge.on_result("reverse")
	assert bridge.on_result("a list") == "please reverse a list"
	assert pending.text == "please reverse a list"


async def test_remote_recognizer_sends_command_frames():
	frames = []

	async def send_json(frame):
		frames.append(frame)

	recognizer = RemoteRecognizer(send_json)
	await recognizer.start()
	await recognizer.stop()
	assert frames == [
		{"type": "command", "action": "start"},
		{"type": "command", "action": "stop"},
	]

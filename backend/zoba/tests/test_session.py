import unittest
from unittest.mock import AsyncMock

from zoba.agent.artifacts import AssistantResult
from zoba.errors import FixAttemptsExceeded, GenerationFailed
from zoba.session import FIX_APOLOGY, GENERATION_APOLOGY, EditorSession, Transcript


def _gateway(result=None, error=None) -> AsyncMock:
    return AsyncMock(return_value=result, side_effect=error)


class TranscriptTests(unittest.TestCase):
    def test_timestamps_strictly_increase(self):
        transcript = Transcript()
        for i in range(20):
            transcript.append("user", f"message {i}")

        timestamps = [m.timestamp for m in transcript.messages]
        self.assertEqual(len(transcript), 20)
        self.assertTrue(all(a < b for a, b in zip(timestamps, timestamps[1:])))


class EditorSessionTests(unittest.IsolatedAsyncioTestCase):
    async def test_successful_prompt_updates_source_and_transcript(self):
        gateway = _gateway(
            AssistantResult(explanation_text="Done.", extracted_diagram_source="flowchart TD\nA-->B")
        )
        session = EditorSession(gateway=gateway)

        reply = await session.submit_prompt("make a flowchart from A to B")

        self.assertEqual(session.diagram_source, "flowchart TD\nA-->B")
        self.assertEqual([m.role for m in session.transcript.messages], ["user", "assistant"])
        self.assertEqual(reply.attached_diagram_source, "flowchart TD\nA-->B")
        request = gateway.await_args.args[0]
        self.assertTrue(request.user_prompt.startswith("make a flowchart from A to B"))
        self.assertIn("style NodeName fill:#color", request.user_prompt)
        self.assertEqual(request.conversation_history, [])

    async def test_history_is_sent_on_follow_up(self):
        gateway = _gateway(AssistantResult(explanation_text="ok", extracted_diagram_source="graph TD\nA-->B"))
        session = EditorSession(gateway=gateway)

        await session.submit_prompt("first")
        await session.submit_prompt("second")

        history = gateway.await_args.args[0].conversation_history
        self.assertEqual([m.content for m in history], ["first", "ok"])

    async def test_blank_prompt_is_ignored(self):
        gateway = _gateway()
        session = EditorSession(gateway=gateway)

        self.assertIsNone(await session.submit_prompt("   "))
        gateway.assert_not_awaited()
        self.assertEqual(len(session.transcript), 0)

    async def test_failure_appends_apology_and_keeps_source(self):
        session = EditorSession("pie title x", gateway=_gateway(error=GenerationFailed()))

        reply = await session.submit_prompt("change it")

        self.assertEqual(reply.content, GENERATION_APOLOGY)
        self.assertEqual(session.diagram_source, "pie title x")
        self.assertEqual(len(session.transcript), 2)

    async def test_render_error_enables_fix_and_fix_replaces_source(self):
        gateway = _gateway(
            AssistantResult(explanation_text="fixed", extracted_diagram_source="flowchart TD\nA-->B")
        )
        session = EditorSession("A-->B", gateway=gateway)

        result = await session.render()
        self.assertFalse(result.ok)
        self.assertIsNotNone(session.syntax_error)

        reply = await session.fix_syntax()

        request = gateway.await_args.args[0]
        self.assertTrue(request.is_fix_request)
        self.assertEqual(request.fix_attempt, 1)
        self.assertEqual(request.error_description, result.message)
        self.assertEqual(session.diagram_source, "flowchart TD\nA-->B")
        self.assertIsNone(session.syntax_error)
        self.assertIn("```mermaid\nflowchart TD\nA-->B\n```", reply.content)
        self.assertTrue((await session.render()).ok)

    async def test_error_from_previous_source_is_not_sent_for_fixing(self):
        gateway = _gateway(
            AssistantResult(explanation_text="Redrawn.", extracted_diagram_source="flowchart TD\nX-->Y")
        )
        session = EditorSession("A-->B", gateway=gateway)
        await session.render()
        self.assertIsNotNone(session.syntax_error)

        await session.submit_prompt("draw X to Y instead")
        gateway.reset_mock()

        self.assertIsNone(session.syntax_error)
        self.assertIsNone(await session.fix_syntax())
        gateway.assert_not_awaited()

    async def test_restoring_other_source_clears_error(self):
        gateway = _gateway(AssistantResult(explanation_text="v1", extracted_diagram_source="graph TD\nA-->B"))
        session = EditorSession(gateway=gateway)
        first_reply = await session.submit_prompt("v1")
        session.apply_source("A-->C")
        await session.render()

        session.restore(first_reply)

        self.assertIsNone(session.syntax_error)

    async def test_fix_without_error_does_nothing(self):
        gateway = _gateway()
        session = EditorSession("flowchart TD\nA-->B", gateway=gateway)
        await session.render()

        self.assertIsNone(await session.fix_syntax())
        gateway.assert_not_awaited()

    async def test_repeated_fixes_count_attempts(self):
        gateway = _gateway(AssistantResult(explanation_text="no luck", extracted_diagram_source="A-->B"))
        session = EditorSession("A-->B", gateway=gateway)

        for expected_attempt in (1, 2):
            await session.render()
            await session.fix_syntax()
            self.assertEqual(gateway.await_args.args[0].fix_attempt, expected_attempt)

        session.apply_source("B-->C")
        await session.render()
        await session.fix_syntax()
        self.assertEqual(gateway.await_args.args[0].fix_attempt, 1)

    async def test_exceeded_attempts_are_reported_in_transcript(self):
        session = EditorSession("A-->B", gateway=_gateway(error=FixAttemptsExceeded(4, 3)))
        await session.render()

        reply = await session.fix_syntax()

        self.assertIn("exceeds the limit of 3", reply.content)
        self.assertEqual(session.diagram_source, "A-->B")

    async def test_fix_failure_appends_fix_apology(self):
        session = EditorSession("A-->B", gateway=_gateway(error=GenerationFailed()))
        await session.render()

        reply = await session.fix_syntax()

        self.assertEqual(reply.content, FIX_APOLOGY)

    async def test_restore_reapplies_attached_source(self):
        gateway = _gateway(AssistantResult(explanation_text="v1", extracted_diagram_source="graph TD\nA-->B"))
        session = EditorSession(gateway=gateway)
        first_reply = await session.submit_prompt("v1")
        gateway.return_value = AssistantResult(explanation_text="v2", extracted_diagram_source="graph TD\nA-->C")
        await session.submit_prompt("v2")

        self.assertTrue(session.restore(first_reply))
        self.assertEqual(session.diagram_source, "graph TD\nA-->B")
        self.assertFalse(session.restore(session.transcript.messages[0]))


if __name__ == "__main__":
    unittest.main()

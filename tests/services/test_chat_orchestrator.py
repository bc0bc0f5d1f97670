"""Tests for ChatOrchestrator."""

import httpx
import pytest

from project_assistant.actions.base import ActionResult, ActionSettings
from project_assistant.actions.executor import ActionExecutor
from project_assistant.db.database_models import ConversationDO
from project_assistant.errors import AssistantNotFoundError, ConversationCreateError, ModelCallError
from project_assistant.services.chat_orchestrator import (
    FALLBACK_REPLY,
    ChatOrchestrator,
    compose_reply,
    conversation_title
)

PURGE_CONFIRMATION = (
    "La caché ha sido limpiada exitosamente. Los cambios deberían verse reflejados en unos minutos."
)


class SpyExecutor(ActionExecutor):
    """Executor that counts invocations."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.invocations = []

    async def execute(self, action_name, context, params=None):
        self.invocations.append(action_name)
        return await super().execute(action_name, context, params)


class BrokenMessages:
    """Message store that cannot be written to."""

    def get_by_conversation(self, conversation_id, limit=None):
        return []

    def add_batch(self, messages):
        raise RuntimeError("database is locked")


class RejectingConversations:
    def get_for_user(self, conversation_id, user_id):
        return None

    def create(self, conversation):
        return False


class UnreadableProjects:
    """Project store whose records the health check cannot read."""

    def lookup(self, project_id):
        return object()


def _vercel_ok(request):
    return httpx.Response(200, json={})


@pytest.fixture
async def http_client():
    client = httpx.AsyncClient(transport=httpx.MockTransport(_vercel_ok))
    yield client
    await client.aclose()


@pytest.fixture
def executor(action_log_repo):
    return SpyExecutor(action_log_repo)


@pytest.fixture
def make_orchestrator(
    assistant_repo, conversation_repo, message_repo, project_repo, model_client, executor, http_client
):
    def _make(**overrides):
        defaults = dict(
            assistants=assistant_repo,
            conversations=conversation_repo,
            messages=message_repo,
            projects=project_repo,
            model_client=model_client,
            executor=executor,
            action_settings=ActionSettings(vercel_token="tok_abc"),
            http_client=http_client
        )
        defaults.update(overrides)
        return ChatOrchestrator(**defaults)
    return _make


@pytest.fixture
def orchestrator(make_orchestrator, seeded_project):
    return make_orchestrator()


class TestComposeReply:
    """SUT: compose_reply"""

    def test_no_action(self):
        assert compose_reply("Hola", None) == "Hola"

    def test_success(self):
        assert compose_reply("Listo.", ActionResult.ok("hecho")) == "Listo.\n\n✅ Acción ejecutada: hecho"

    def test_failure(self):
        assert compose_reply("Listo.", ActionResult.fail("falló")) == "Listo.\n\n❌ Error: falló"

    def test_annotation_only(self):
        assert compose_reply("", ActionResult.ok("hecho")) == "✅ Acción ejecutada: hecho"


class TestConversationTitle:
    """SUT: conversation_title"""

    def test_first_line(self):
        assert conversation_title("  ¿Por qué no carga?\nDetalles...") == "¿Por qué no carga?"

    def test_truncated(self):
        assert conversation_title("x" * 200) == "x" * 80


class TestHandleTurn:
    """SUT: ChatOrchestrator.handle_turn"""

    async def test_successful_action(self, orchestrator, model_client, action_log_repo, executor):
        model_client.replies.append("Listo.\n[ACTION: clear_cache]")

        turn = await orchestrator.handle_turn("p1", "Limpia la caché por favor", "u1")

        assert turn.response == f"Listo.\n\n✅ Acción ejecutada: {PURGE_CONFIRMATION}"
        assert turn.action["type"] == "clear_cache"
        assert turn.action["success"] is True
        assert turn.action["message"] == PURGE_CONFIRMATION
        assert "purgedAt" in turn.action["data"]
        assert executor.invocations == ["clear_cache"]

        [record] = action_log_repo.list_by_project("p1")
        assert record.action_type == "clear_cache"
        assert record.success is True
        assert record.user_id == "u1"
        assert record.assistant_id == "a1"

    async def test_failed_action(self, make_orchestrator, assistant_repo, project_repo,
                                 make_project, make_assistant, model_client, action_log_repo):
        """A project without a platform reference gets an explicit error."""
        project_repo.create(make_project())
        assistant_repo.create(make_assistant(vercel_project_id=None))
        model_client.replies.append("Listo.\n[ACTION: clear_cache]")

        turn = await make_orchestrator().handle_turn("p1", "Limpia la caché", "u1")

        assert turn.response == "Listo.\n\n❌ Error: No hay información de Vercel configurada para este proyecto."
        assert turn.action["success"] is False
        [record] = action_log_repo.list_by_project("p1")
        assert record.success is False
        assert record.error_message == "No hay información de Vercel configurada para este proyecto."

    async def test_plain_reply_skips_executor(self, orchestrator, model_client, executor, action_log_repo):
        model_client.replies.append("Puedes cambiar tu plan desde Configuración.")

        turn = await orchestrator.handle_turn("p1", "¿Cómo cambio mi plan?", "u1")

        assert turn.response == "Puedes cambiar tu plan desde Configuración."
        assert turn.action is None
        assert executor.invocations == []
        assert action_log_repo.list_by_project("p1") == []

    async def test_unknown_action_stripped_not_executed(self, orchestrator, model_client, executor):
        model_client.replies.append("Hecho.\n[ACTION: drop_database]")

        turn = await orchestrator.handle_turn("p1", "Borra todo", "u1")

        assert turn.response == "Hecho."
        assert turn.action is None
        assert executor.invocations == []

    async def test_empty_reply_fallback(self, orchestrator, model_client):
        model_client.replies.append("")
        turn = await orchestrator.handle_turn("p1", "hola", "u1")
        assert turn.response == FALLBACK_REPLY

    async def test_model_settings_from_assistant(self, orchestrator, model_client):
        model_client.replies.append("ok")
        await orchestrator.handle_turn("p1", "hola", "u1")

        [call] = model_client.calls
        assert call["system"] == "Eres el asistente."
        assert call["model"] == "claude-sonnet-4-20250514"
        assert call["max_tokens"] == 4096
        assert call["messages"] == [{"role": "user", "content": "hola"}]

    async def test_no_assistant(self, make_orchestrator, model_client):
        with pytest.raises(AssistantNotFoundError):
            await make_orchestrator().handle_turn("p1", "hola", "u1")
        assert model_client.calls == []

    async def test_model_failure(self, make_orchestrator, seeded_project, failing_model_client, message_repo):
        """No reply and nothing persisted when the model call fails."""
        orchestrator = make_orchestrator(model_client=failing_model_client)

        with pytest.raises(ModelCallError):
            await orchestrator.handle_turn("p1", "hola", "u1")

        [conversation] = orchestrator.conversations.list_by_user("p1", "u1")
        assert message_repo.get_by_conversation(conversation.id) == []

    async def test_conversation_create_failure(self, make_orchestrator, seeded_project):
        orchestrator = make_orchestrator(conversations=RejectingConversations())
        with pytest.raises(ConversationCreateError):
            await orchestrator.handle_turn("p1", "hola", "u1")

    async def test_persistence_failure_keeps_reply(self, make_orchestrator, seeded_project, model_client, assistant_repo):
        model_client.replies.append("Todo bien.")
        orchestrator = make_orchestrator(messages=BrokenMessages())

        turn = await orchestrator.handle_turn("p1", "hola", "u1")

        assert turn.response == "Todo bien."
        assert assistant_repo.get_by_project("p1").total_messages == 2


class TestConversationResolution:
    """SUT: ChatOrchestrator.handle_turn conversation handling"""

    async def test_creates_conversation(self, orchestrator, model_client, conversation_repo):
        model_client.replies.append("ok")
        turn = await orchestrator.handle_turn("p1", "¿Cómo exporto mis datos?", "u1")

        conversation = conversation_repo.get(turn.conversation_id)
        assert conversation.user_id == "u1"
        assert conversation.project_id == "p1"
        assert conversation.assistant_id == "a1"
        assert conversation.title == "¿Cómo exporto mis datos?"

    async def test_continues_conversation(self, orchestrator, model_client):
        model_client.replies.extend(["Primera respuesta", "Segunda respuesta"])

        first = await orchestrator.handle_turn("p1", "primera", "u1")
        second = await orchestrator.handle_turn("p1", "segunda", "u1", first.conversation_id)

        assert second.conversation_id == first.conversation_id
        assert model_client.calls[1]["messages"] == [
            {"role": "user", "content": "primera"},
            {"role": "assistant", "content": "Primera respuesta"},
            {"role": "user", "content": "segunda"},
        ]

    async def test_foreign_conversation_not_reused(self, orchestrator, model_client):
        """Another requester's conversation id silently starts a new one."""
        model_client.replies.extend(["a", "b"])
        owner = await orchestrator.handle_turn("p1", "mío", "u1")

        intruder = await orchestrator.handle_turn("p1", "hola", "u2", owner.conversation_id)

        assert intruder.conversation_id != owner.conversation_id
        assert model_client.calls[1]["messages"] == [{"role": "user", "content": "hola"}]

    async def test_other_project_conversation_not_reused(self, orchestrator, model_client, conversation_repo):
        conversation_repo.create(ConversationDO(id="c-other", project_id="p2", assistant_id="a2", user_id="u1"))
        model_client.replies.append("ok")

        turn = await orchestrator.handle_turn("p1", "hola", "u1", "c-other")

        assert turn.conversation_id != "c-other"

    async def test_archived_conversation_not_reused(self, orchestrator, model_client, conversation_repo):
        model_client.replies.extend(["a", "b"])
        first = await orchestrator.handle_turn("p1", "hola", "u1")
        conversation_repo.archive(first.conversation_id)

        second = await orchestrator.handle_turn("p1", "hola otra vez", "u1", first.conversation_id)

        assert second.conversation_id != first.conversation_id


class TestPersistence:
    """SUT: ChatOrchestrator.handle_turn bookkeeping"""

    async def test_messages_and_counters(self, orchestrator, model_client, message_repo,
                                         conversation_repo, assistant_repo):
        model_client.replies.append('Listo.\n[ACTION: clear_cache]\n[PARAMS: {"token": "abc"}]')

        turn = await orchestrator.handle_turn("p1", "Limpia la caché", "u1")

        user_msg, assistant_msg = message_repo.get_by_conversation(turn.conversation_id)
        assert (user_msg.role, user_msg.content) == ("user", "Limpia la caché")
        assert (assistant_msg.role, assistant_msg.content) == ("assistant", turn.response)
        assert assistant_msg.action["type"] == "clear_cache"
        assert assistant_msg.action["success"] is True
        assert assistant_msg.action["params"] == {"token": "[REDACTED]"}

        conversation = conversation_repo.get(turn.conversation_id)
        assert conversation.message_count == 2
        assert conversation.actions_requested == ["clear_cache"]
        assert conversation.actions_executed == ["clear_cache"]
        assert conversation.last_message_at is not None

        assistant = assistant_repo.get_by_project("p1")
        assert assistant.total_messages == 2
        assert assistant.total_actions_executed == 1
        assert assistant.last_interaction is not None

    async def test_failed_action_not_counted_as_executed(self, make_orchestrator, assistant_repo, project_repo,
                                                         make_project, make_assistant, model_client,
                                                         conversation_repo):
        project_repo.create(make_project())
        assistant_repo.create(make_assistant(vercel_project_id=None))
        model_client.replies.append("[ACTION: view_logs]")

        turn = await make_orchestrator().handle_turn("p1", "logs", "u1")

        conversation = conversation_repo.get(turn.conversation_id)
        assert conversation.actions_requested == ["view_logs"]
        assert conversation.actions_executed == []
        assert assistant_repo.get_by_project("p1").total_actions_executed == 0

    async def test_resubmission_is_a_new_turn(self, orchestrator, model_client, action_log_repo, message_repo):
        """The same message sent twice executes and audits twice."""
        model_client.replies.extend(["[ACTION: clear_cache]", "[ACTION: clear_cache]"])

        first = await orchestrator.handle_turn("p1", "Limpia la caché", "u1")
        second = await orchestrator.handle_turn("p1", "Limpia la caché", "u1", first.conversation_id)

        assert len(action_log_repo.list_by_project("p1")) == 2
        assert len(message_repo.get_by_conversation(second.conversation_id)) == 4

    async def test_history_window(self, make_orchestrator, seeded_project, model_client):
        orchestrator = make_orchestrator(max_history_messages=3)
        model_client.replies.extend(["r1", "r2", "r3"])

        first = await orchestrator.handle_turn("p1", "m1", "u1")
        await orchestrator.handle_turn("p1", "m2", "u1", first.conversation_id)
        await orchestrator.handle_turn("p1", "m3", "u1", first.conversation_id)

        # Window of 3 opens on "r1", which is dropped so the history starts with a user turn
        assert model_client.calls[2]["messages"] == [
            {"role": "user", "content": "m2"},
            {"role": "assistant", "content": "r2"},
            {"role": "user", "content": "m3"},
        ]


def _platform(state):
    def handler(request):
        if request.method == "HEAD":
            return httpx.Response(200)
        return httpx.Response(200, json={"deployments": [{"uid": "dpl_1", "state": state}]})
    return handler


class TestHealthCheckTurn:
    """SUT: ChatOrchestrator.handle_turn with the health_check action"""

    @pytest.mark.parametrize(
        "state, unreadable_store, success",
        [
            ("READY", False, True),
            ("ERROR", False, False),
            ("READY", True, False),
        ],
        ids=["handler-succeeds", "handler-fails", "handler-raises"]
    )
    async def test_one_execution_one_audit_record(self, make_orchestrator, seeded_project, model_client,
                                                  executor, action_log_repo, state, unreadable_store, success):
        model_client.replies.append("Reviso el sistema.\n[ACTION: health_check]")
        overrides = {"projects": UnreadableProjects()} if unreadable_store else {}

        async with httpx.AsyncClient(transport=httpx.MockTransport(_platform(state))) as http:
            turn = await make_orchestrator(http_client=http, **overrides).handle_turn(
                "p1", "¿Está todo funcionando?", "u1"
            )

        assert executor.invocations == ["health_check"]
        [record] = action_log_repo.list_by_project("p1")
        assert record.action_type == "health_check"
        assert record.success is success
        assert turn.action["type"] == "health_check"
        assert turn.action["success"] is success
        if unreadable_store:
            assert turn.response.startswith("Reviso el sistema.\n\n❌ Error: Error ejecutando acción:")
            assert record.error_message.startswith("Error ejecutando acción:")
        elif success:
            assert turn.response == (
                "Reviso el sistema.\n\n✅ Acción ejecutada: Todos los sistemas están funcionando correctamente."
            )
        else:
            assert turn.response == "Reviso el sistema.\n\n❌ Error: Algunos sistemas reportan problemas."

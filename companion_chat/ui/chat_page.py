"""NiceGUI chat page with streamed assistant answers."""

import os
from datetime import datetime

from nicegui import app, ui

from companion_chat.agent.chat_agent import get_response_streamer
from companion_chat.conversation import texts
from companion_chat.conversation.names import MAX_NAME_LENGTH, AssistantNameStore
from companion_chat.conversation.session import ChatSession
from companion_chat.models.message import Message

# Enter sends; Shift+Enter inserts a newline.
SEND_KEY_EVENT = "keydown.enter.exact.prevent"

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f9fafb; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #6366f1 0%, #10b981 100%); }

    .message-user {
        background: #4f46e5;
        color: white;
        border-radius: 18px 18px 4px 18px;
        white-space: pre-wrap;
    }

    .message-model {
        background: white;
        color: #1f2937;
        border: 1px solid #f3f4f6;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar-user { background: #4f46e5; }
    .avatar-model { background: #10b981; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #d1d5db;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 16px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #6366f1; }
</style>
"""


def message_label(message: Message, assistant_name: str) -> str:
    """Name shown above a bubble. MODEL messages keep the name they were written under."""
    if message.is_user:
        return texts.USER_LABEL
    return message.author or assistant_name


def format_time(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%H:%M")


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each browser tab gets its own session."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession(get_response_streamer(), AssistantNameStore(app.storage.user))

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-model"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-8 h-8 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-base")

    def render_typing_dots() -> None:
        with ui.row().classes("items-center gap-2"):
            with ui.row().classes("gap-1"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")
            ui.label(f"{session.assistant_name} schreibt...").classes(
                "text-xs text-gray-400"
            )

    def render_message(msg: Message) -> None:
        is_user = msg.is_user
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-model"

        with ui.row().classes(f"w-full {align} gap-2 items-end no-wrap"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes(
                f"max-w-[70%] gap-1 {'items-end' if is_user else 'items-start'}"
            ):
                ui.label(message_label(msg, session.assistant_name)).classes(
                    "text-xs text-gray-400 px-1"
                )
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        ui.label(msg.text).classes("text-sm leading-relaxed")
                    elif not msg.text and session.is_pending(msg):
                        render_typing_dots()
                    else:
                        ui.markdown(msg.text).classes("text-sm leading-relaxed")
                ui.label(format_time(msg.timestamp)).classes("text-[10px] text-gray-400 px-1")
            if is_user:
                render_avatar(True)

    @ui.refreshable
    def messages_view() -> None:
        for msg in session.messages:
            render_message(msg)

    def on_session_change() -> None:
        messages_view.refresh()
        scroll_area.scroll_to(percent=1.0)

    session.add_listener(on_session_change)

    async def send_message() -> None:
        await session.submit()

    async def confirm_clear() -> None:
        with ui.dialog() as dialog, ui.card():
            ui.label(texts.CLEAR_CONFIRMATION_TEXT)
            with ui.row().classes("w-full justify-end"):
                ui.button("Abbrechen", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("Löschen", on_click=lambda: dialog.submit(True)).props("color=negative")
        if await dialog:
            session.clear()
        dialog.delete()

    def open_settings() -> None:
        with ui.dialog() as dialog, ui.card().classes("w-96"):
            ui.label("Einstellungen").classes("text-xl font-bold")
            name_input = (
                ui.input("Name der KI", value=session.assistant_name, placeholder="z.B. Luna")
                .props(f"maxlength={MAX_NAME_LENGTH} autofocus")
                .classes("w-full")
            )
            ui.label(
                "Dieser Name wird in der Konversation angezeigt und beeinflusst, "
                "wie sich die KI vorstellt."
            ).classes("text-xs text-gray-500")

            def save() -> None:
                try:
                    session.change_name(name_input.value)
                except ValueError:
                    ui.notify("Bitte gib einen Namen ein.", type="warning")
                    return
                dialog.close()

            with ui.row().classes("w-full justify-end gap-2"):
                ui.button("Abbrechen", on_click=dialog.close).props("flat")
                ui.button("Speichern", icon="save", on_click=save).bind_enabled_from(
                    name_input, "value", lambda v: bool(v and v.strip())
                )
        dialog.open()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container gap-0").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("auto_awesome").classes("text-white text-3xl")
                with ui.column().classes("gap-0"):
                    ui.label("Dein KI-Begleiter").classes("text-lg font-semibold text-white")
                    ui.label().bind_text_from(
                        session, "assistant_name", lambda name: f"{name} ist bereit"
                    ).classes("text-xs text-white/80")
            with ui.row().classes("items-center gap-1"):
                ui.button(icon="cleaning_services", on_click=confirm_clear).props(
                    "flat round color=white"
                ).tooltip("Chat leeren")
                ui.button(icon="settings", on_click=open_settings).props(
                    "flat round color=white"
                ).tooltip("Einstellungen")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
            with ui.column().classes("w-full p-5 gap-5"):
                messages_view()

        # Input
        with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
            with ui.row().classes("w-full gap-3 items-end no-wrap"):
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    (
                        ui.textarea(placeholder="Schreibe eine Nachricht...")
                        .bind_value(session, "draft")
                        .props("autogrow borderless dense rows=1")
                        .classes("w-full")
                        .on(SEND_KEY_EVENT, send_message)
                    )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=indigo"
                )
                send_btn.bind_enabled_from(session, "is_busy", lambda busy: not busy)
            ui.label("KI kann Fehler machen. Bitte überprüfe wichtige Informationen.").classes(
                "w-full text-center text-[10px] text-gray-400"
            )


def main() -> None:
    """Run the chat page standalone, without the FastAPI routes."""
    ui.run(
        title="Dein KI-Begleiter",
        port=int(os.getenv("UI_PORT", "8080")),
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "companion-chat-secret"),
        reload=False,
    )


if __name__ == "__main__":
    main()

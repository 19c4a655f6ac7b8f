"""NiceGUI chat page with document attachments and SSE streaming."""

from nicegui import events, ui

from src.attachments.models import Attachment, AttachmentStatus
from src.models.errors import SafeChatError
from src.models.schemas import Role
from src.ui.session import ChatSession

STATUS_ICONS = {
    AttachmentStatus.PENDING: ("hourglass_empty", "text-gray-400"),
    AttachmentStatus.PROCESSING: ("sync", "text-blue-400"),
    AttachmentStatus.READY: ("description", "text-emerald-500"),
    AttachmentStatus.ERROR: ("error_outline", "text-red-500"),
}


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    session = ChatSession()

    @ui.refreshable
    def message_list() -> None:
        if not session.messages:
            ui.label("Start a secure conversation").classes("text-gray-400 self-center")
        for msg in session.messages:
            ui.chat_message(msg.content, sent=msg.role == Role.USER)

    @ui.refreshable
    def attachment_chips() -> None:
        with ui.row().classes("gap-2"):
            for attachment in session.attachments.snapshot():
                render_chip(attachment)

    def render_chip(attachment: Attachment) -> None:
        icon, color = STATUS_ICONS[attachment.status]
        with ui.row().classes("items-center gap-1 border rounded px-2 py-1"):
            ui.icon(icon).classes(color)
            ui.label(attachment.name).classes("text-sm max-w-[150px] truncate")
            ui.button(
                icon="close",
                on_click=lambda a=attachment: session.remove_attachment(a.id),
            ).props("flat dense round size=sm")

    session.attachments.subscribe(attachment_chips.refresh)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        session.attach(e.file.name, data, e.file.content_type)

    async def send_message() -> None:
        text = input_field.value or ""
        if not session.can_submit(text):
            return

        input_field.value = ""
        send_btn.disable()
        turn = session.submit(text)
        message_list.refresh()

        try:
            await session.reply(turn)
        except SafeChatError as err:
            ui.notify(err.message, type="negative")
        finally:
            send_btn.enable()
            message_list.refresh()

    def new_chat() -> None:
        session.reset()
        message_list.refresh()

    def toggle_safe_mode() -> None:
        protected = session.toggle_safe_mode()
        safe_mode_label.set_text(
            "PII is automatically redacted before sending"
            if protected
            else "Data sent without protection"
        )

    with ui.column().classes("w-full max-w-3xl mx-auto h-screen p-4"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("SafePipe Chat").classes("text-lg font-semibold")
            with ui.row().classes("items-center gap-2"):
                ui.switch("Protected", value=session.safe_mode, on_change=toggle_safe_mode)
                ui.button(icon="add", on_click=new_chat).props("flat round")

        with ui.scroll_area().classes("flex-grow w-full"):
            message_list()

        attachment_chips()
        with ui.row().classes("w-full items-end gap-2"):
            ui.upload(on_upload=handle_upload, auto_upload=True, multiple=True).props(
                "accept=.pdf,.txt,.md,.csv flat"
            ).classes("w-32")
            input_field = (
                ui.textarea(placeholder="Type a message...")
                .props("autogrow dense rows=1")
                .classes("flex-grow")
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")
        safe_mode_label = ui.label("PII is automatically redacted before sending").classes(
            "text-xs text-gray-400 self-center"
        )


def main() -> None:
    ui.run(title="SafePipe Chat", port=8080, reload=False)


if __name__ == "__main__":
    main()

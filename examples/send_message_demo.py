"""Minimal demonstration: post to #general and read it back."""

from rocketchat_rest import create_client
from rocketchat_rest.domain.models import Attachment, Channel, Pagination, PostMessage

if __name__ == "__main__":
    client = create_client()
    info = client.get_server_info()
    print("Server:", info.version)

    res = client.post_message(
        PostMessage(
            channel="#general",
            text="hello from rocketchat_rest",
            attachments=[Attachment(title="demo", text="structured payload")],
        )
    )
    print("Posted:", res.chat_message.id)
    client.set_reaction(res.chat_message.id, ":wave:", True)

    for m in client.get_messages(Channel(id=res.chat_message.room_id), Pagination(count=5)):
        print(m.timestamp, m.user.username if m.user else "?", m.msg)

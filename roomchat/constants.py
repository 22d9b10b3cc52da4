"""Event names and default notice texts shared by the router and clients."""

# Inbound event kinds
EVENT_ENTER_ROOM = "enterRoom"
EVENT_LEAVE_ROOM = "leaveRoom"
EVENT_MESSAGE = "message"
EVENT_ACTIVITY = "activity"

# Outbound event kinds (``message`` and ``activity`` travel both ways)
EVENT_USER_LIST = "userList"
EVENT_ROOM_LIST = "roomList"
EVENT_ERROR = "error"

ADMIN_NAME = "Admin"
WELCOME_TEXT = "Welcome to Chat App!"

JOINED_SELF_TEXT = "You have joined the {room} chat room"
JOINED_TEXT = "{name} has joined the room"
LEFT_TEXT = "{name} has left the room"

TIME_FORMAT = "%H:%M:%S"

__all__ = [
    "EVENT_ENTER_ROOM",
    "EVENT_LEAVE_ROOM",
    "EVENT_MESSAGE",
    "EVENT_ACTIVITY",
    "EVENT_USER_LIST",
    "EVENT_ROOM_LIST",
    "EVENT_ERROR",
    "ADMIN_NAME",
    "WELCOME_TEXT",
    "JOINED_SELF_TEXT",
    "JOINED_TEXT",
    "LEFT_TEXT",
    "TIME_FORMAT",
]

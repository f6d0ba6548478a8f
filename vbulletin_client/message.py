"""Private messages: reading one message and sending a new one."""

import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import METHOD_INSERT_PM, METHOD_SHOW_PM
from .envelope import Recoverable, extract_error, interpret
from .exceptions import RemoteError


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_datetime(value: Any) -> Optional[datetime.datetime]:
    seconds = _to_int(value, -1)
    if seconds < 0:
        return None
    return datetime.datetime.fromtimestamp(seconds, datetime.timezone.utc)


@dataclass
class MessageUser:
    """Sender of a private message."""

    id: int
    username: str
    title: str = ''
    signature: str = ''
    avatar_url: str = ''
    online: bool = False
    join_date: Optional[datetime.datetime] = None


@dataclass
class Message:
    """A private message as shown by private_showpm."""

    id: int
    folder_id: int
    recipients: str
    title: str
    message: str
    message_plain: str
    message_bbcode: str
    status: str
    time: Optional[datetime.datetime]
    user_id: int
    username: str
    user: MessageUser

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> Optional["Message"]:
        """
        Build a Message from the ``response`` object of private_showpm.

        Returns None when the payload does not contain a message.
        """
        html = raw.get('HTML') if isinstance(raw, dict) else None
        if not isinstance(html, dict):
            return None
        pm = html.get('pm')
        postbit = html.get('postbit')
        post = postbit.get('post') if isinstance(postbit, dict) else None
        if not isinstance(pm, dict) or not isinstance(post, dict):
            return None

        online_status = post.get('onlinestatus')
        online = online_status.get('onlinestatus') if isinstance(online_status, dict) else None
        user = MessageUser(
            id=_to_int(post.get('userid')),
            username=post.get('username', ''),
            title=post.get('usertitle', ''),
            signature=post.get('signature', ''),
            avatar_url=post.get('avatarurl', ''),
            online=bool(_to_int(online)),
            join_date=_to_datetime(post.get('joindate')),
        )
        return cls(
            id=_to_int(pm.get('pmid')),
            folder_id=_to_int(pm.get('folderid')),
            recipients=pm.get('recipients', ''),
            title=post.get('title') or pm.get('title', ''),
            message=post.get('message', ''),
            message_plain=post.get('message_plain', ''),
            message_bbcode=post.get('message_bbcode', ''),
            status=post.get('statusicon', ''),
            time=_to_datetime(post.get('posttime')),
            user_id=user.id,
            username=pm.get('fromusername', ''),
            user=user,
        )


async def get_message(client, pm_id: int) -> Message:
    """
    Fetch a private message of the logged in user.

    Raises:
        RemoteError: If the remote returns no message
    """
    response = await client.call_method(METHOD_SHOW_PM, {'pmid': pm_id})
    message = None
    if isinstance(response, dict) and isinstance(response.get('response'), dict):
        message = Message.from_raw(response['response'])
    if message is None:
        raise RemoteError(extract_error(response) or 'no message returned', response)
    return message


async def send_message(client, username: str, title: str, message: str,
                       signature: bool = False) -> None:
    """
    Send a private message.

    Only pm_messagesent counts as success; anything else raises RemoteError.
    """
    response = await client.call_method(METHOD_INSERT_PM, {
        'recipients': username,
        'title': title,
        'message': message,
        'signature': '1' if signature else '0',
    })
    outcome = interpret(METHOD_INSERT_PM, response)
    if not isinstance(outcome, Recoverable):
        code = outcome.code if outcome is not None else 'message not sent'
        raise RemoteError(code, response)

"""Forum content submission: replies, edits and new threads."""

from typing import Any, Dict, Optional

from .constants import METHOD_EDIT_POST, METHOD_NEW_REPLY, METHOD_NEW_THREAD
from .envelope import raise_for_error


async def _submit(client, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
    response = await client.call_method(method, params)
    raise_for_error(method, response)
    return response


async def new_post(client, thread_id: int, message: str, signature: bool = False) -> Dict[str, Any]:
    """Reply to a thread. Returns the raw envelope."""
    return await _submit(client, METHOD_NEW_REPLY, {
        'threadid': thread_id,
        'message': message,
        'signature': '1' if signature else '0',
    })


async def edit_post(client, post_id: int, message: str, reason: Optional[str] = None,
                    signature: bool = False) -> Dict[str, Any]:
    params = {
        'postid': post_id,
        'message': message,
        'signature': '1' if signature else '0',
    }
    if reason:
        params['reason'] = reason
    return await _submit(client, METHOD_EDIT_POST, params)


async def new_thread(client, forum_id: int, subject: str, message: str,
                     signature: bool = False) -> Dict[str, Any]:
    """Start a thread; its first post carries ``message``."""
    return await _submit(client, METHOD_NEW_THREAD, {
        'forumid': forum_id,
        'subject': subject,
        'message': message,
        'signature': '1' if signature else '0',
    })

"""
Gebeta Backend: Food Assistant Route
====================================

POST /api/chat   {"message": "...", "history": [{"role", "content"}, ...]}
              →  {"success": true, "data": {"reply": "..."}}

The catalogue is read inside a short session that is closed before the
model call, so no database connection is held while waiting on the provider.
"""

from starlette.requests import Request

from app.database import session_scope
from app.http import ResponseWriter, Router, parse_body, success_envelope
from app.schemas.chat import ChatReply, ChatRequest
from app.schemas.common import validate_payload
from app.services.assistant_service import assistant_service
from app.services.business_service import business_service


async def chat(request: Request, response: ResponseWriter) -> None:
    data = validate_payload(ChatRequest, await parse_body(request))
    async with session_scope() as db:
        catalogue = await business_service.list_businesses(db)

    reply = await assistant_service.reply(data.message, data.history, catalogue)
    await response.json(200, success_envelope(data=ChatReply(reply=reply).to_document()))


def register_chat_routes(router: Router) -> None:
    router.post("/api/chat", chat)

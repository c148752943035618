"""
DataMind Agent - Router.

API endpoint for chatting with the data analyst agent.
"""

from fastapi import APIRouter, Depends

from datamind.deps import get_session, require_chat
from datamind.modules.agent.schemas import ChatRequest, ChatResponse
from datamind.modules.sessions.session import Session
from datamind.schemas import ErrorResponse

router = APIRouter(
    prefix="/sessions/{session_id}",
    tags=["agent"],
    dependencies=[require_chat],
)


@router.post("/chat", response_model=ChatResponse, responses={409: {"model": ErrorResponse}})
async def chat_with_agent(request: ChatRequest, session: Session = Depends(get_session)):
    """
    Ask a question about the loaded dataset.

    - Rejected with 409 while another request is in flight
    - Answers are advisory, inferred from a sample of the data
    - A suggested chart is prepended to the dashboard and returned as newChart
    """
    user_message, reply = await session.send_message(request.message)
    return ChatResponse(user_message=user_message, reply=reply, new_chart=reply.related_chart)

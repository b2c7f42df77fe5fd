from zoba.agent.artifacts import AssistantRequest, AssistantResult
from zoba.agent.assistant_agent import AssistantAgent
from zoba.agent.fix_agent import SyntaxFixAgent
from zoba.agent.llm_client import LLMClient


async def run_assistant(request: AssistantRequest, *, llm: LLMClient | None = None) -> AssistantResult:
    """Route a request to the syntax-fix flow or the general assistant."""
    agent = SyntaxFixAgent(llm=llm) if request.is_fix_request else AssistantAgent(llm=llm)
    return await agent.run(request)

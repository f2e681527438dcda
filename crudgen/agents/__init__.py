from typing import Dict

from crudgen.agents.base_agent import FileSpec, FrameworkAgent, SYSTEM_PROMPT
from crudgen.agents.express_agent import ExpressAgent
from crudgen.agents.spring_agent import SpringAgent


# One prompt variant per supported framework.
AGENTS: Dict[str, FrameworkAgent] = {
    agent.framework: agent for agent in (ExpressAgent(), SpringAgent())
}


def get_agent(framework: str) -> FrameworkAgent:
    try:
        return AGENTS[framework]
    except KeyError:
        raise ValueError(f"Unsupported framework: {framework}") from None


__all__ = ["AGENTS", "FileSpec", "FrameworkAgent", "SYSTEM_PROMPT", "get_agent"]

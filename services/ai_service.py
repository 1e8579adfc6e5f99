"""
services/ai_service.py

Ollama-backed helpers for the selected assignment: summarize a submission
against the assignment description, or draft the assignment itself.
Ollama calls block, so they run in a worker thread with a timeout.
"""
import asyncio
import logging

import ollama

from config import (
    OLLAMA_MODEL,
    OLLAMA_KEEP_ALIVE,
    OLLAMA_NUM_PREDICT,
    OLLAMA_NUM_CTX,
    OLLAMA_TEMPERATURE,
    OLLAMA_TOP_P,
    AI_TIMEOUT_SEC,
    AI_MAX_CONTENT_CHARS,
)

logger = logging.getLogger("services.ai")

TIMEOUT_MESSAGE = "AI took too long this time. Try again with a shorter document."

SYSTEM_PROMPT = "\n".join(
    [
        "Role: study assistant for a student's class assignments.",
        "Write in first person and do not introduce yourself.",
        "Use correct grammar and spelling.",
    ]
)


def _chat_options() -> dict:
    return {
        "num_predict": OLLAMA_NUM_PREDICT,
        "num_ctx": OLLAMA_NUM_CTX,
        "temperature": OLLAMA_TEMPERATURE,
        "top_p": OLLAMA_TOP_P,
    }


async def generate(prompt: str, system_prompt: str = "") -> str:
    system = SYSTEM_PROMPT + ("\n" + system_prompt if system_prompt else "")
    try:
        response = await asyncio.wait_for(
            asyncio.to_thread(
                lambda: ollama.chat(
                    model=OLLAMA_MODEL,
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": prompt},
                    ],
                    options=_chat_options(),
                    keep_alive=OLLAMA_KEEP_ALIVE,
                )
            ),
            timeout=AI_TIMEOUT_SEC,
        )
    except asyncio.TimeoutError:
        logger.warning("Ollama timed out after %ss (model=%s)", AI_TIMEOUT_SEC, OLLAMA_MODEL)
        return TIMEOUT_MESSAGE
    return response["message"]["content"]


async def summarize_submission(submission_content: str, assignment_description: str) -> str:
    prompt = (
        f"Assignment description: {assignment_description}\n\n"
        f"Submission content: {submission_content[:AI_MAX_CONTENT_CHARS]}\n\n"
        "Analyze this submission against the assignment requirements and give feedback."
    )
    return await generate(prompt)


async def complete_assignment(assignment_information: dict[str, str], system_prompt: str = "") -> str:
    details = ",\n".join(f"{key}: {value}" for key, value in assignment_information.items())
    prompt = (
        "Complete this assignment from the student's point of view. "
        "Reply with the finished assignment only. "
        f"Assignment information: {details[:AI_MAX_CONTENT_CHARS]}"
    )
    return await generate(prompt, system_prompt)

"""
생성 서비스 프록시 API 라우터

요청: {primaryContext, question, retrievedContext?}
응답: {response} 또는 {error} (non-2xx)
"""
from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from src.api.auth import verify_api_key
from src.api.dependencies import get_generation_client
from src.rag.context_assembler import ContextAssembler
from src.services.generation_client import GenerationClient
from src.types import GenerationOk
from src.utils.response import service_error
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["generate"], dependencies=[Depends(verify_api_key)])

assembler = ContextAssembler()


class GenerateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    primary_context: str
    question: str
    retrieved_context: Optional[str] = None


@router.post("/generate")
async def generate(request: GenerateRequest, client: GenerationClient = Depends(get_generation_client)):
    """조립된 컨텍스트로 답변 생성"""
    if not request.question.strip():
        return JSONResponse(status_code=400, content=service_error("Question cannot be empty."))

    prompt = assembler.build(request.primary_context, request.question, request.retrieved_context)
    result = await client.generate(prompt)

    if isinstance(result, GenerationOk):
        return {"response": result.text}

    logger.error(f"/generate 실패: {result.reason}")
    return JSONResponse(
        status_code=500,
        content=service_error("The AI model failed to generate a response.")
    )

# server_api.py
import logging
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from rlwe_extract.core.ciphertext import Ciphertext
from rlwe_extract.core.context import RingContext
from rlwe_extract.core.errors import IndexOutOfRange, MalformedInput
from rlwe_extract.core.params import DEFAULT_PARAMETERS
from rlwe_extract.core.scheme import extract

logger = logging.getLogger(__name__)

app = FastAPI()

# Initialize Ring Context (Public Parameters Only)
# The server DOES NOT need keys: extraction only rearranges ciphertext coefficients.
logger.info("Initializing extraction backend...")
SERVER_CONTEXT = RingContext.from_parameters(DEFAULT_PARAMETERS)


class ExtractRequest(BaseModel):
    parts: List[List[int]]
    loc: int


class ExtractResponse(BaseModel):
    loc: int
    coefficients: List[int]


@app.get("/")
def home():
    return {
        "status": "Extraction Server Online",
        "n": SERVER_CONTEXT.degree(),
        "p": SERVER_CONTEXT.plaintext_modulus(),
        "Q": str(SERVER_CONTEXT.ciphertext_modulus()),
    }


@app.post("/extract", response_model=ExtractResponse)
def extract_coefficient(request: ExtractRequest):
    """
    Receives: Full ciphertext (c0, c1) + coefficient index
    Returns: Extracted ciphertext of length n+1
    """
    try:
        ct = Ciphertext(request.parts, params=SERVER_CONTEXT.params())
        extracted = extract(ct, request.loc, SERVER_CONTEXT)
    except IndexOutOfRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MalformedInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    return ExtractResponse(loc=extracted.loc, coefficients=extracted.tolist())

"""
src/services/prediction_client.py
Serialize a StatisticsReport into a prompt for the text-generation
service and validate the JSON guess it sends back.
"""
from __future__ import annotations

import json
import random
import re
import time
from typing import Any, Sequence

import requests

from src.models.draw import PredictionResult, StatisticsReport
from src.models.statistics_engine import average_repeats, top_numbers
from src.utils.config import (
    DEFAULT_CONFIDENCE,
    DRAW_SIZE,
    MAX_NUMBER,
    MIN_NUMBER,
    PREDICTION_API_URL,
    PREDICTION_MAX_RETRIES,
    PREDICTION_TIMEOUT,
    in_range,
)
from src.utils.logger import get_logger

log = get_logger("prediction")

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")
_MIN_REASONING = 5


class PredictionError(RuntimeError):
    """The service could not be reached or returned an unusable guess."""


# ── Prompt ────────────────────────────────────────────────────────

def build_prompt(report: StatisticsReport, recent_games: Sequence[Sequence[int]]) -> str:
    top_ten = ", ".join(str(n) for n in top_numbers(report, 10))
    primes = ", ".join(f"{k} primos: {v}" for k, v in report.prime_count.items() if v)
    last_two = json.dumps([list(g) for g in recent_games[-2:]])

    return (
        "Atue como um analista estatístico especializado em Lotofácil. Analise os seguintes dados:\n"
        f"- Dezenas com maior frequência: {top_ten}\n"
        f"- Equilíbrio histórico: Pares (Média: {report.parity.even:.1f}), "
        f"Ímpares (Média: {report.parity.odd:.1f})\n"
        f"- Tendência de Soma: Média de {report.sum_avg:.1f}, Mediana {report.sum_median:.0f}, "
        f"Desvio Padrão {report.sum_std_dev:.1f}\n"
        f"- Distribuição de primos por sorteio: {primes}\n"
        f"- Média de dezenas repetidas do concurso anterior: {average_repeats(report):.1f}\n"
        f"- Últimos sorteios: {last_two}\n\n"
        f"Gere um palpite de exatamente {DRAW_SIZE} números únicos ({MIN_NUMBER}-{MAX_NUMBER}).\n"
        "Retorne EXCLUSIVAMENTE um objeto JSON no formato abaixo, sem texto adicional:\n"
        "{\n"
        f'  "numbers": [{DRAW_SIZE} números únicos],\n'
        '  "reasoning": "explicação técnica breve",\n'
        '  "confidence": 0.85\n'
        "}"
    )


# ── Response ──────────────────────────────────────────────────────

def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if not num.is_integer():
        return None
    return int(num)


def parse_prediction_response(raw_text: str) -> PredictionResult:
    """Extract the JSON object from free text and validate it."""
    if not raw_text:
        raise PredictionError("Empty response from prediction service.")
    if not isinstance(raw_text, str):
        raise PredictionError(f"Expected text from prediction service, got {type(raw_text).__name__}.")

    match = _JSON_BLOCK.search(raw_text)
    if not match:
        raise PredictionError("Prediction service did not return a JSON object.")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise PredictionError(f"Malformed JSON in prediction response: {exc}") from exc

    raw_numbers = data.get("numbers") if isinstance(data.get("numbers"), list) else []
    coerced = (_coerce_int(n) for n in raw_numbers)
    numbers = sorted({n for n in coerced if n is not None and in_range(n)})
    if len(numbers) != DRAW_SIZE:
        raise PredictionError(
            f"Prediction has {len(numbers)} valid numbers, exactly {DRAW_SIZE} are required."
        )

    reasoning = data.get("reasoning")
    if not isinstance(reasoning, str) or len(reasoning) < _MIN_REASONING:
        raise PredictionError("Missing or invalid reasoning in prediction response.")

    confidence = data.get("confidence")
    if isinstance(confidence, (int, float)) and not isinstance(confidence, bool):
        confidence = min(max(float(confidence), 0.0), 1.0)
    else:
        confidence = DEFAULT_CONFIDENCE

    return PredictionResult(numbers=tuple(numbers), reasoning=reasoning.strip(), confidence=confidence)


# ── HTTP ──────────────────────────────────────────────────────────

def _post(url: str, payload: dict[str, Any], max_retries: int = PREDICTION_MAX_RETRIES) -> requests.Response:
    """POST with retry + exponential backoff."""
    last_exc: requests.RequestException | None = None
    for attempt in range(1, max_retries + 1):
        try:
            log.debug(f"POST {url} (attempt {attempt})")
            resp = requests.post(
                url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=PREDICTION_TIMEOUT,
            )
            resp.raise_for_status()
            return resp
        except requests.RequestException as exc:
            last_exc = exc
            log.warning(f"Prediction request failed (attempt {attempt}/{max_retries}): {exc}")
            if attempt < max_retries:
                time.sleep(2 ** attempt + random.uniform(0, 1))
    log.error(f"All {max_retries} attempts failed for {url}")
    raise PredictionError(f"Prediction service unreachable: {last_exc}") from last_exc


def request_prediction(
    report: StatisticsReport,
    recent_games: Sequence[Sequence[int]],
    url: str = PREDICTION_API_URL,
) -> PredictionResult:
    prompt = build_prompt(report, recent_games)
    resp = _post(url, {"message": prompt})

    try:
        body = resp.json()
    except ValueError as exc:
        raise PredictionError("Prediction service returned a non-JSON body.") from exc

    # the service answers in either "response" or "message"
    raw = (body.get("response") or body.get("message") or "") if isinstance(body, dict) else ""
    result = parse_prediction_response(raw)
    log.info(f"Prediction received: {list(result.numbers)} (confidence={result.confidence:.2f})")
    return result

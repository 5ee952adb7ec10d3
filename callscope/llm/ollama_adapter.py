"""
callscope/llm/ollama_adapter.py
Ollama backend adapter. Ollama runs locally, so call logs never leave
the machine. Supports any model pulled via `ollama pull <model>`.

INSTALL:
  https://ollama.com/download

RECOMMENDED MODELS (by RAM):
  <4GB RAM:  phi3:mini, qwen2:1.5b
  4-8GB RAM: mistral:7b, llama3.1:8b
"""

import json
import logging
import urllib.request
import urllib.error
from typing import List, Optional

from callscope.llm.base import InsightAdapter, SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)


class OllamaAdapter(InsightAdapter):

    def __init__(
        self,
        model:       str   = 'llama3.1:8b',
        host:        str   = 'http://localhost:11434',
        timeout_sec: int   = 120,
        temperature: float = 0.3,
    ):
        self.model       = model
        self.host        = host.rstrip('/')
        self.timeout_sec = timeout_sec
        self.temperature = temperature

    # ── AVAILABILITY CHECK ───────────────────────────────────
    def is_available(self) -> bool:
        """Ping Ollama and confirm the configured model is pulled."""
        try:
            models = self._fetch_model_names()
        except urllib.error.URLError:
            logger.warning(
                "Ollama not reachable at " + self.host +
                ". Start Ollama or check if it's running."
            )
            return False
        except Exception as e:
            logger.warning(f"Ollama availability check failed: {e}")
            return False

        # Exact match or family prefix (e.g. "llama3.1" matches "llama3.1:8b")
        available = any(
            m == self.model or m.startswith(self.model.split(':')[0])
            for m in models
        )
        if not available:
            logger.warning(
                f"Model '{self.model}' not found in Ollama. "
                f"Available: {models}. "
                f"Run: ollama pull {self.model}"
            )
        return available

    # ── GENERATION ───────────────────────────────────────────
    def generate(self, prompt: str) -> Optional[str]:
        payload = json.dumps({
            'model':  self.model,
            'prompt': prompt,
            'system': SYSTEM_INSTRUCTION,
            'stream': False,
            'options': {
                'temperature': self.temperature,
                'num_predict': 600,
            },
        }).encode('utf-8')

        try:
            req = urllib.request.Request(
                f"{self.host}/api/generate",
                data    = payload,
                headers = {'Content-Type': 'application/json'},
                method  = 'POST',
            )
            with urllib.request.urlopen(req, timeout=self.timeout_sec) as resp:
                data = json.loads(resp.read().decode('utf-8'))

            text = str(data.get('response', '')).strip()
            return text or None

        except urllib.error.URLError as e:
            logger.error(f"Ollama request failed: {e}")
            return None
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode failed in Ollama response: {e}")
            return None
        except Exception as e:
            logger.error(f"Ollama generate error: {e}")
            return None

    # ── MODEL MANAGEMENT HELPERS ─────────────────────────────
    def list_available_models(self) -> List[str]:
        """Return list of locally available Ollama model names."""
        try:
            return self._fetch_model_names()
        except Exception as e:
            logger.debug(f"Model listing failed: {e}")
            return []

    def _fetch_model_names(self) -> List[str]:
        req = urllib.request.Request(f"{self.host}/api/tags", method='GET')
        with urllib.request.urlopen(req, timeout=5) as resp:
            data = json.loads(resp.read().decode())
        return [m['name'] for m in data.get('models', [])]

import json
import logging
import re
import requests
from flask import current_app
from errors import UpstreamError

logger = logging.getLogger(__name__)

SAFETY_CATEGORIES = (
    'HARM_CATEGORY_HARASSMENT',
    'HARM_CATEGORY_HATE_SPEECH',
    'HARM_CATEGORY_SEXUALLY_EXPLICIT',
    'HARM_CATEGORY_DANGEROUS_CONTENT',
)

ACTION_ITEMS_PROMPT = """Extract all action items from the following meeting notes.
Return only a JSON array of objects with the keys "description", "assignedTo",
"dueDate" (YYYY-MM-DD) and "priority" (high/medium/low); use null when unknown.

Meeting Notes:
{notes}
"""

JSON_ARRAY = re.compile(r'\[\s*\{.*\}\s*\]', re.DOTALL)


def generate_text(prompt, temperature=0.7, max_tokens=1024):
    """Send a prompt to the generative text API and return the first candidate"""
    api_key = current_app.config.get('GEMINI_API_KEY')
    if not api_key:
        # Simulation mode for development
        logger.info(f"[Assistant] Simulation mode - prompt of {len(prompt)} chars")
        return f"[simulated response] {prompt[:200]}"

    url = f"{current_app.config['GEMINI_API_URL'].rstrip('/')}/{current_app.config['GEMINI_MODEL']}:generateContent"
    body = {
        'contents': [{'parts': [{'text': prompt}]}],
        'generationConfig': {
            'temperature': temperature,
            'topK': 40,
            'topP': 0.95,
            'maxOutputTokens': max_tokens,
        },
        'safetySettings': [
            {'category': category, 'threshold': 'BLOCK_MEDIUM_AND_ABOVE'}
            for category in SAFETY_CATEGORIES
        ],
    }

    try:
        response = requests.post(url, params={'key': api_key}, json=body, timeout=30)
    except requests.RequestException as e:
        logger.error(f"[Assistant] Request failed: {e}")
        raise UpstreamError('No response received from AI service')

    if response.status_code != 200:
        logger.error(f"[Assistant] API error {response.status_code}: {response.text[:500]}")
        raise UpstreamError(f'AI service error ({response.status_code})')

    candidates = response.json().get('candidates') or []
    try:
        return candidates[0]['content']['parts'][0]['text']
    except (IndexError, KeyError, TypeError):
        raise UpstreamError('No response generated from AI')


def _repair_json(text):
    """Fix the usual model mistakes: single quotes, bare keys, trailing commas"""
    text = text.replace("'", '"')
    text = re.sub(r'([{,]\s*)(\w+)(\s*):', r'\1"\2"\3:', text)
    return re.sub(r',(\s*[\]}])', r'\1', text)


def parse_action_items(text):
    """Best-effort extraction of a JSON array of action items from model output"""
    match = JSON_ARRAY.search(text or '')
    if not match:
        return []

    for candidate in (match.group(0), _repair_json(match.group(0))):
        try:
            items = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(items, list):
            return [item for item in items if isinstance(item, dict)]

    logger.warning("[Assistant] Could not parse action items from response")
    return []


def extract_action_items(notes):
    text = generate_text(ACTION_ITEMS_PROMPT.format(notes=notes), temperature=0.2)
    return parse_action_items(text)

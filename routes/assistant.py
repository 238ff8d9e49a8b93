from flask import Blueprint
from schemas import GeneratePayload, ActionItemsPayload
from services import login_required
from services import assistant
from utils import respond, json_body

assistant_bp = Blueprint('assistant', __name__, url_prefix='/api/assistant')


@assistant_bp.route('/generate', methods=['POST'])
@login_required
def generate():
    """Forward a free-text prompt to the generative text API"""
    payload = GeneratePayload.model_validate(json_body())
    text = assistant.generate_text(payload.prompt, payload.temperature, payload.max_tokens)
    return respond({'text': text})


@assistant_bp.route('/action-items', methods=['POST'])
@login_required
def action_items():
    payload = ActionItemsPayload.model_validate(json_body())
    items = assistant.extract_action_items(payload.notes)
    return respond(items, count=len(items))

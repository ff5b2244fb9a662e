import logging

from flask import Blueprint, request, jsonify

from kamus.services.dictionary_handler import get_translation_service
from kamus.services.errors import TranslationFailure

logger = logging.getLogger(__name__)

translate_bp = Blueprint('translate', __name__)


@translate_bp.route('', methods=['POST'])
@translate_bp.route('/', methods=['POST'])
def translate():
    """
    Request body: { "text": "cantik", "sourceLang": "ms", "targetLang": "zh" }
    Response:     { "translatedText": "美丽", "sourceLang": "ms", "targetLang": "zh" }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    text = str(data.get('text') or '').strip()

    if not text:
        return jsonify({'error': 'No text provided'}), 400

    source_lang = data.get('sourceLang') or 'ms'
    target_lang = data.get('targetLang') or 'zh'

    try:
        translated = get_translation_service().translate(text, source_lang, target_lang)
    except TranslationFailure as e:
        logger.error("Translation failed for '%s': %s", text, e)
        translated = f"Translation error: {e.detail}"

    return jsonify({
        'translatedText': translated,
        'sourceLang': source_lang,
        'targetLang': target_lang
    })

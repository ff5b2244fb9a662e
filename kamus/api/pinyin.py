from flask import Blueprint, request, jsonify

from kamus.services.pinyin_converter import get_pinyin_service

pinyin_bp = Blueprint('pinyin', __name__)


@pinyin_bp.route('/<path:word>', methods=['GET'])
def get_pinyin(word):
    converter = get_pinyin_service()
    return jsonify({
        'word': word,
        'pinyin': converter.convert(word),
        'mapped': converter.has_mapping(word)
    })


@pinyin_bp.route('/mappings', methods=['POST'])
def add_mapping():
    """
    Admin: add or overwrite a word-level pinyin mapping

    Request body: { "word": "kucing", "pinyin": "māo" }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    word = str(data.get('word') or '').strip()
    pinyin = str(data.get('pinyin') or '').strip()

    if not word or not pinyin:
        return jsonify({
            'success': False,
            'error': 'Both word and pinyin are required'
        }), 400

    get_pinyin_service().add_mapping(word, pinyin)
    return jsonify({
        'success': True,
        'word': word.lower(),
        'pinyin': pinyin
    }), 201

# kamus/api/dictionary.py
from flask import Blueprint, request, jsonify
from kamus.services.dictionary_handler import get_dictionary_service

dictionary_bp = Blueprint('dictionary', __name__)


@dictionary_bp.route('/<path:word>', methods=['GET'])
def get_entry(word):
    """
    Resolve a Malay or Chinese word

    Response (always 200, failures come back as a degraded entry):
    {
        "sourceWord": "cantik",
        "targetWord": "美丽",
        "pronunciation": "měi lì",
        "explanation": "美丽 bermaksud cantik ...",
        "examples": "1. 她是个美丽的女孩。\\n   Dia seorang gadis yang cantik. ...",
        "isAdjective": true,
        "isCurated": false
    }
    """
    entry = get_dictionary_service().resolve(word)
    return jsonify(entry.to_response()), 200


@dictionary_bp.route('/lookup', methods=['POST'])
def lookup_word():
    """
    Request body:
    {
        "word": "layu"
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    word = str(data.get('word') or '').strip()

    if not word:
        return jsonify({
            'success': False,
            'error': 'No word provided'
        }), 400

    entry = get_dictionary_service().resolve(word)
    return jsonify({
        'success': True,
        'word': word,
        'entry': entry.to_response()
    }), 200

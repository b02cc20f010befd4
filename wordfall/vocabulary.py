"""Built-in word packages.

English targets with their Turkish translation, shown as the falling word in
hard mode.
"""

# English to Turkish vocabulary by package
WORD_PACKAGES = {
    'animals': {
        'name': 'Animals',
        'items': {
            'cat': 'kedi',
            'dog': 'köpek',
            'bird': 'kuş',
            'horse': 'at',
            'cow': 'inek',
            'sheep': 'koyun',
            'fish': 'balık',
            'rabbit': 'tavşan',
            'lion': 'aslan',
            'elephant': 'fil',
            'monkey': 'maymun',
            'bear': 'ayı'
        }
    },
    'colors': {
        'name': 'Colors',
        'items': {
            'red': 'kırmızı',
            'blue': 'mavi',
            'green': 'yeşil',
            'yellow': 'sarı',
            'black': 'siyah',
            'white': 'beyaz',
            'orange': 'turuncu',
            'purple': 'mor',
            'brown': 'kahverengi',
            'pink': 'pembe'
        }
    },
    'food': {
        'name': 'Food & Drink',
        'items': {
            'bread': 'ekmek',
            'water': 'su',
            'apple': 'elma',
            'cheese': 'peynir',
            'milk': 'süt',
            'egg': 'yumurta',
            'rice': 'pirinç',
            'soup': 'çorba',
            'tea': 'çay',
            'coffee': 'kahve',
            'sugar': 'şeker',
            'salt': 'tuz'
        }
    },
    'days': {
        'name': 'Days of Week',
        'items': {
            'monday': 'pazartesi',
            'tuesday': 'salı',
            'wednesday': 'çarşamba',
            'thursday': 'perşembe',
            'friday': 'cuma',
            'saturday': 'cumartesi',
            'sunday': 'pazar'
        }
    },
    'home': {
        'name': 'Around the House',
        'items': {
            'house': 'ev',
            'door': 'kapı',
            'window': 'pencere',
            'table': 'masa',
            'chair': 'sandalye',
            'bed': 'yatak',
            'kitchen': 'mutfak',
            'garden': 'bahçe',
            'key': 'anahtar',
            'lamp': 'lamba'
        }
    }
}


def get_all_packages() -> list[str]:
    """Get list of all package keys."""
    return list(WORD_PACKAGES.keys())


def get_package_name(package: str) -> str:
    """Get display name for a package."""
    return WORD_PACKAGES.get(package, {}).get('name', package)


def get_package_items(package: str) -> dict:
    """Get {english: translation} items for a package."""
    return WORD_PACKAGES.get(package, {}).get('items', {})


def get_seed_data() -> list[dict]:
    """Flatten every package into word records.

    Returns list of {id, target, display_form, category} dicts. Ids are
    '<package>:<english>' so they stay stable across runs.
    """
    items = []
    for package, data in WORD_PACKAGES.items():
        for english, translation in data['items'].items():
            items.append({
                'id': f'{package}:{english}',
                'target': english,
                'display_form': translation,
                'category': package
            })
    return items

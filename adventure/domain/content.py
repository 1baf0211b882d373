# adventure/domain/content.py: catalogue intégré (remplaçable via ADVENTURE_CATALOG)

ITEMS = [
    {"id": "hat-wizard", "type": "clothing", "category": "hats", "name": "Wizard Hat",
     "description": "A pointy hat for number wizards.", "costGems": 25, "imageUrl": "items/hat-wizard.png"},
    {"id": "cape-star", "type": "clothing", "category": "capes", "name": "Star Cape",
     "description": "Sparkles every time you count.", "costGems": 40, "imageUrl": "items/cape-star.png"},
    {"id": "pet-owl", "type": "pet", "category": "pets", "name": "Owl Buddy",
     "description": "Hoots when you get it right.", "costGems": 60, "imageUrl": "items/pet-owl.png"},
    {"id": "glasses-round", "type": "accessory", "category": "glasses", "name": "Round Glasses",
     "description": "For reading the small numbers.", "costGems": 15, "imageUrl": "items/glasses-round.png"},
    {"id": "desk-oak", "type": "furniture", "category": "desks", "name": "Oak Desk",
     "description": "A sturdy desk for homework.", "costGems": 30, "imageUrl": "items/desk-oak.png"},
    {"id": "lamp-moon", "type": "furniture", "category": "lamps", "name": "Moon Lamp",
     "description": "Glows softly at night.", "costGems": 20, "imageUrl": "items/lamp-moon.png"},
]

BADGES = [
    {"id": "first-quest", "name": "First Quest", "description": "Complete your first quest",
     "imageUrl": "badges/first-quest.png",
     "unlockCriteria": {"type": "quest_complete", "value": "counting-1"}},
    {"id": "quest-explorer", "name": "Quest Explorer", "description": "Complete 3 quests",
     "imageUrl": "badges/quest-explorer.png",
     "unlockCriteria": {"type": "quests_completed", "value": 3}},
    {"id": "gem-collector", "name": "Gem Collector", "description": "Collect 50 gems",
     "imageUrl": "badges/gem-collector.png",
     "unlockCriteria": {"type": "gems_earned", "value": 50}},
    {"id": "star-gazer", "name": "Star Gazer", "description": "Earn 20 stars",
     "imageUrl": "badges/star-gazer.png",
     "unlockCriteria": {"type": "stars_earned", "value": 20}},
]

QUESTS = [
    {
        "id": "counting-1", "name": "Cookie Count", "description": "Count the cookies in the jar.",
        "questType": "discovery", "vocabularyTerms": ["count", "number"],
        "rewardsGems": 10, "rewardsStars": 5,
        "content": {"activities": [
            {"type": "counting", "instructions": "Count the cookies", "instructions_bg": "Преброй бисквитките",
             "correctAnswer": 3, "objects": ["cookie", "cookie", "cookie"]},
            {"type": "multiple_choice", "instructions": "What is 2 + 2?", "instructions_bg": "Колко е 2 + 2?",
             "correctAnswer": "opt2", "options": [
                 {"id": "opt1", "text": "3", "isCorrect": False},
                 {"id": "opt2", "text": "4", "isCorrect": True},
             ]},
        ]},
    },
    {
        "id": "adding-1", "name": "Apple Adding", "description": "Add apples from two baskets.",
        "questType": "practice", "vocabularyTerms": ["add", "sum"],
        "rewardsGems": 15, "rewardsStars": 5,
        "content": {"activities": [
            {"type": "counting", "instructions": "How many apples in total?", "instructions_bg": "Колко ябълки общо?",
             "correctAnswer": 5, "objects": ["apple"] * 5, "hint_bg": "Събери двете кошници"},
            {"type": "multiple_choice", "instructions": "What is 3 + 4?", "instructions_bg": "Колко е 3 + 4?",
             "correctAnswer": "b", "options": [
                 {"id": "a", "text": "6", "isCorrect": False},
                 {"id": "b", "text": "7", "isCorrect": True},
                 {"id": "c", "text": "8", "isCorrect": False},
             ]},
        ]},
    },
]

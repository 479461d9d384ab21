"""Zodiac reference database.

Static records for the twelve signs plus the small pure functions built on
them: compatibility scoring, cosmic weather classification and wealth
archetype synthesis.

Lookups never raise. Unknown sign names yield None from get_sign() and every
caller checks for that explicitly.
"""

from typing import Any, Optional

from .constants import RISK_LEVELS


ZODIAC_DATABASE: dict[str, dict[str, Any]] = {
    "Aries": {
        "name": "Aries",
        "symbol": "♈",
        "element": "Fire",
        "modality": "Cardinal",
        "ruler": "Mars",
        "date_range": {"start": (3, 21), "end": (4, 19)},
        "personality": {
            "keywords": ["Pioneer", "Warrior", "Leader", "Initiator", "Competitor"],
            "strengths": ["Courageous", "Confident", "Enthusiastic", "Optimistic", "Honest", "Passionate"],
            "challenges": ["Impatient", "Moody", "Short-tempered", "Impulsive", "Aggressive"],
            "core_values": ["Independence", "Action", "Leadership", "Innovation", "Adventure"],
            "motivation": "To be first, to lead, to pioneer new territories",
            "fears": ["Being controlled", "Losing", "Boredom", "Inactivity"],
        },
        "wealth_profile": {
            "style": "Aggressive Growth Investor",
            "strengths": ["Quick decision-making", "Risk-taking ability", "Entrepreneurial spirit", "Innovation"],
            "challenges": ["Impatience with long-term investments", "Over-trading", "Ignoring risk management"],
            "best_investments": ["Startups", "Growth stocks", "Cryptocurrency", "Short-term trades", "New technologies"],
            "money_mindset": "Money is energy to fuel adventures and initiatives",
            "ideal_portfolio": "70% growth stocks, 20% crypto/alternatives, 10% cash for opportunities",
            "risk_tolerance": "Very High - Thrives on volatility and quick gains",
        },
        "relationships": {
            "best_matches": ["Leo", "Sagittarius", "Gemini", "Aquarius"],
            "challenging_matches": ["Cancer", "Capricorn"],
            "business_partners": ["Leo", "Sagittarius", "Libra"],
        },
        "house": 1,
        "body_part": "Head",
        "colors": ["Red", "Scarlet", "Carmine"],
        "gemstones": ["Diamond", "Bloodstone", "Ruby"],
        "lucky_numbers": [1, 9, 19, 27],
    },
    "Taurus": {
        "name": "Taurus",
        "symbol": "♉",
        "element": "Earth",
        "modality": "Fixed",
        "ruler": "Venus",
        "date_range": {"start": (4, 20), "end": (5, 20)},
        "personality": {
            "keywords": ["Builder", "Provider", "Sensualist", "Stabilizer", "Collector"],
            "strengths": ["Reliable", "Patient", "Practical", "Devoted", "Responsible", "Stable"],
            "challenges": ["Stubborn", "Possessive", "Uncompromising", "Materialistic", "Resistant to change"],
            "core_values": ["Security", "Comfort", "Beauty", "Loyalty", "Quality"],
            "motivation": "To build lasting value and enjoy life's pleasures",
            "fears": ["Financial insecurity", "Change", "Instability", "Scarcity"],
        },
        "wealth_profile": {
            "style": "Value Investor & Wealth Preserver",
            "strengths": ["Patience", "Long-term thinking", "Asset accumulation", "Value recognition"],
            "challenges": ["Missing opportunities due to caution", "Over-attachment to holdings", "Slow adaptation"],
            "best_investments": ["Blue-chip stocks", "Real estate", "Bonds", "Precious metals", "Dividend stocks"],
            "money_mindset": "Money is security and the means to comfort and beauty",
            "ideal_portfolio": "40% stocks, 30% real estate, 20% bonds, 10% commodities",
            "risk_tolerance": "Low to Moderate - Prefers steady, predictable returns",
        },
        "relationships": {
            "best_matches": ["Virgo", "Capricorn", "Cancer", "Pisces"],
            "challenging_matches": ["Leo", "Aquarius"],
            "business_partners": ["Virgo", "Capricorn", "Cancer"],
        },
        "house": 2,
        "body_part": "Throat, Neck",
        "colors": ["Green", "Pink", "Earth tones"],
        "gemstones": ["Emerald", "Rose Quartz", "Sapphire"],
        "lucky_numbers": [2, 6, 12, 24],
    },
    "Gemini": {
        "name": "Gemini",
        "symbol": "♊",
        "element": "Air",
        "modality": "Mutable",
        "ruler": "Mercury",
        "date_range": {"start": (5, 21), "end": (6, 20)},
        "personality": {
            "keywords": ["Communicator", "Teacher", "Student", "Networker", "Trader"],
            "strengths": ["Versatile", "Communicative", "Intellectual", "Witty", "Adaptable", "Curious"],
            "challenges": ["Inconsistent", "Indecisive", "Nervous", "Superficial", "Anxious"],
            "core_values": ["Knowledge", "Communication", "Variety", "Freedom", "Connection"],
            "motivation": "To learn, share ideas, and connect diverse concepts",
            "fears": ["Boredom", "Being misunderstood", "Missing out", "Isolation"],
        },
        "wealth_profile": {
            "style": "Diversified Trader & Information Arbitrageur",
            "strengths": ["Information gathering", "Quick adaptation", "Multiple income streams", "Networking"],
            "challenges": ["Lack of focus", "Over-diversification", "Analysis paralysis", "Short attention span"],
            "best_investments": ["Tech stocks", "Communications sector", "Options trading", "Diverse ETFs", "Information businesses"],
            "money_mindset": "Money is freedom and the tool for exploration",
            "ideal_portfolio": "Highly diversified across 10+ asset classes, frequent rebalancing",
            "risk_tolerance": "Moderate to High - Enjoys variety and quick moves",
        },
        "relationships": {
            "best_matches": ["Libra", "Aquarius", "Aries", "Leo"],
            "challenging_matches": ["Virgo", "Pisces"],
            "business_partners": ["Libra", "Aquarius", "Sagittarius"],
        },
        "house": 3,
        "body_part": "Arms, Hands, Lungs",
        "colors": ["Yellow", "Light Blue", "Silver"],
        "gemstones": ["Agate", "Citrine", "Tiger's Eye"],
        "lucky_numbers": [3, 5, 14, 23],
    },
    "Cancer": {
        "name": "Cancer",
        "symbol": "♋",
        "element": "Water",
        "modality": "Cardinal",
        "ruler": "Moon",
        "date_range": {"start": (6, 21), "end": (7, 22)},
        "personality": {
            "keywords": ["Nurturer", "Protector", "Intuitive", "Mother", "Caregiver"],
            "strengths": ["Intuitive", "Caring", "Protective", "Loyal", "Empathetic", "Tenacious"],
            "challenges": ["Moody", "Pessimistic", "Clingy", "Oversensitive", "Insecure"],
            "core_values": ["Family", "Security", "Home", "Tradition", "Emotional connection"],
            "motivation": "To nurture, protect, and create emotional security",
            "fears": ["Abandonment", "Emotional vulnerability", "Rejection", "Instability"],
        },
        "wealth_profile": {
            "style": "Conservative Saver & Family Wealth Builder",
            "strengths": ["Intuitive market timing", "Protective instincts", "Long-term planning", "Saving discipline"],
            "challenges": ["Emotional investing", "Over-caution", "Hoarding tendencies", "Fear-based decisions"],
            "best_investments": ["Home/real estate", "Family businesses", "Defensive stocks", "Savings accounts", "Education funds"],
            "money_mindset": "Money is protection and legacy for loved ones",
            "ideal_portfolio": "35% real estate, 30% defensive stocks, 25% bonds, 10% cash reserves",
            "risk_tolerance": "Low - Security and capital preservation are paramount",
        },
        "relationships": {
            "best_matches": ["Scorpio", "Pisces", "Taurus", "Virgo"],
            "challenging_matches": ["Aries", "Libra"],
            "business_partners": ["Scorpio", "Pisces", "Taurus"],
        },
        "house": 4,
        "body_part": "Chest, Stomach",
        "colors": ["Silver", "White", "Sea Green"],
        "gemstones": ["Moonstone", "Pearl", "Ruby"],
        "lucky_numbers": [2, 4, 16, 20],
    },
    "Leo": {
        "name": "Leo",
        "symbol": "♌",
        "element": "Fire",
        "modality": "Fixed",
        "ruler": "Sun",
        "date_range": {"start": (7, 23), "end": (8, 22)},
        "personality": {
            "keywords": ["King", "Performer", "Creator", "Leader", "Star"],
            "strengths": ["Creative", "Generous", "Warm-hearted", "Cheerful", "Confident", "Charismatic"],
            "challenges": ["Arrogant", "Stubborn", "Self-centered", "Lazy", "Inflexible"],
            "core_values": ["Recognition", "Creativity", "Leadership", "Generosity", "Excellence"],
            "motivation": "To shine, create, and be recognized for unique contributions",
            "fears": ["Being ignored", "Mediocrity", "Failure", "Humiliation"],
        },
        "wealth_profile": {
            "style": "Luxury Investor & Brand Builder",
            "strengths": ["Leadership in ventures", "Brand creation", "Confidence in decisions", "Generous investing"],
            "challenges": ["Overspending on luxury", "Ego-driven decisions", "Ignoring details", "Show-off investing"],
            "best_investments": ["Luxury brands", "Entertainment sector", "Gold", "Leadership positions", "Creative ventures"],
            "money_mindset": "Money is power, creativity, and the means to generous living",
            "ideal_portfolio": "50% growth stocks, 20% luxury assets, 20% creative ventures, 10% gold",
            "risk_tolerance": "Moderate to High - Confident in quality investments",
        },
        "relationships": {
            "best_matches": ["Aries", "Sagittarius", "Gemini", "Libra"],
            "challenging_matches": ["Taurus", "Scorpio"],
            "business_partners": ["Aries", "Sagittarius", "Gemini"],
        },
        "house": 5,
        "body_part": "Heart, Spine",
        "colors": ["Gold", "Orange", "Royal Purple"],
        "gemstones": ["Ruby", "Amber", "Topaz"],
        "lucky_numbers": [1, 5, 19, 23],
    },
    "Virgo": {
        "name": "Virgo",
        "symbol": "♍",
        "element": "Earth",
        "modality": "Mutable",
        "ruler": "Mercury",
        "date_range": {"start": (8, 23), "end": (9, 22)},
        "personality": {
            "keywords": ["Analyst", "Healer", "Perfectionist", "Servant", "Craftsman"],
            "strengths": ["Analytical", "Practical", "Diligent", "Organized", "Helpful", "Reliable"],
            "challenges": ["Critical", "Worrying", "Perfectionist", "Conservative", "Overthinking"],
            "core_values": ["Perfection", "Service", "Health", "Analysis", "Efficiency"],
            "motivation": "To improve, perfect, and be of service",
            "fears": ["Chaos", "Criticism", "Illness", "Imperfection"],
        },
        "wealth_profile": {
            "style": "Analytical Value Investor & Risk Manager",
            "strengths": ["Detailed analysis", "Risk management", "Budgeting", "Finding undervalued assets"],
            "challenges": ["Over-analysis", "Missing opportunities", "Too conservative", "Perfectionism paralysis"],
            "best_investments": ["Index funds", "Healthcare sector", "Quality bonds", "Dividend aristocrats", "ESG investments"],
            "money_mindset": "Money requires careful analysis and prudent management",
            "ideal_portfolio": "45% diversified stocks, 30% bonds, 15% real estate, 10% cash",
            "risk_tolerance": "Low to Moderate - Careful, calculated risks only",
        },
        "relationships": {
            "best_matches": ["Taurus", "Capricorn", "Cancer", "Scorpio"],
            "challenging_matches": ["Gemini", "Sagittarius"],
            "business_partners": ["Taurus", "Capricorn", "Scorpio"],
        },
        "house": 6,
        "body_part": "Digestive System",
        "colors": ["Navy Blue", "Grey", "Forest Green"],
        "gemstones": ["Sapphire", "Peridot", "Agate"],
        "lucky_numbers": [3, 6, 15, 24],
    },
    "Libra": {
        "name": "Libra",
        "symbol": "♎",
        "element": "Air",
        "modality": "Cardinal",
        "ruler": "Venus",
        "date_range": {"start": (9, 23), "end": (10, 22)},
        "personality": {
            "keywords": ["Diplomat", "Artist", "Partner", "Judge", "Harmonizer"],
            "strengths": ["Diplomatic", "Fair", "Social", "Cooperative", "Gracious", "Idealistic"],
            "challenges": ["Indecisive", "People-pleasing", "Avoids conflict", "Dependent", "Superficial"],
            "core_values": ["Balance", "Harmony", "Justice", "Partnership", "Beauty"],
            "motivation": "To create harmony, beauty, and balanced relationships",
            "fears": ["Conflict", "Ugliness", "Injustice", "Being alone"],
        },
        "wealth_profile": {
            "style": "Balanced Portfolio Manager & Partnership Investor",
            "strengths": ["Portfolio balancing", "Partnership deals", "Aesthetic investments", "Fair negotiations"],
            "challenges": ["Indecision", "Over-reliance on others", "Avoiding tough choices", "Style over substance"],
            "best_investments": ["Balanced funds", "Art/collectibles", "Partnership ventures", "Beauty industry", "Socially responsible investing"],
            "money_mindset": "Money should be balanced, beautiful, and ethically earned",
            "ideal_portfolio": "Perfectly balanced 25% each: stocks, bonds, real estate, alternatives",
            "risk_tolerance": "Moderate - Seeks balance between risk and reward",
        },
        "relationships": {
            "best_matches": ["Gemini", "Aquarius", "Leo", "Sagittarius"],
            "challenging_matches": ["Cancer", "Capricorn"],
            "business_partners": ["Gemini", "Aquarius", "Leo"],
        },
        "house": 7,
        "body_part": "Kidneys, Lower Back",
        "colors": ["Light Blue", "Pink", "Lavender"],
        "gemstones": ["Opal", "Jade", "Rose Quartz"],
        "lucky_numbers": [6, 7, 15, 24],
    },
    "Scorpio": {
        "name": "Scorpio",
        "symbol": "♏",
        "element": "Water",
        "modality": "Fixed",
        "ruler": "Mars/Pluto",
        "date_range": {"start": (10, 23), "end": (11, 21)},
        "personality": {
            "keywords": ["Transformer", "Detective", "Mystic", "Strategist", "Phoenix"],
            "strengths": ["Passionate", "Strategic", "Brave", "Loyal", "Resourceful", "Intuitive"],
            "challenges": ["Jealous", "Secretive", "Manipulative", "Obsessive", "Vindictive"],
            "core_values": ["Power", "Transformation", "Truth", "Depth", "Control"],
            "motivation": "To transform, uncover truth, and wield power wisely",
            "fears": ["Betrayal", "Vulnerability", "Loss of control", "Superficiality"],
        },
        "wealth_profile": {
            "style": "Strategic Power Investor & Transformation Specialist",
            "strengths": ["Deep research", "Strategic thinking", "Crisis investing", "Hidden value discovery"],
            "challenges": ["Obsessive behavior", "Secretive approach", "All-or-nothing mentality", "Manipulation"],
            "best_investments": ["Turnaround situations", "Private equity", "Cryptocurrency", "Research-driven picks", "Crisis opportunities"],
            "money_mindset": "Money is power and transformation tool",
            "ideal_portfolio": "40% concentrated bets, 30% private investments, 20% crypto, 10% cash",
            "risk_tolerance": "High - All-in on deeply researched convictions",
        },
        "relationships": {
            "best_matches": ["Cancer", "Pisces", "Virgo", "Capricorn"],
            "challenging_matches": ["Leo", "Aquarius"],
            "business_partners": ["Cancer", "Pisces", "Capricorn"],
        },
        "house": 8,
        "body_part": "Reproductive System",
        "colors": ["Deep Red", "Black", "Maroon"],
        "gemstones": ["Topaz", "Malachite", "Bloodstone"],
        "lucky_numbers": [4, 8, 13, 18],
    },
    "Sagittarius": {
        "name": "Sagittarius",
        "symbol": "♐",
        "element": "Fire",
        "modality": "Mutable",
        "ruler": "Jupiter",
        "date_range": {"start": (11, 22), "end": (12, 21)},
        "personality": {
            "keywords": ["Explorer", "Philosopher", "Teacher", "Adventurer", "Optimist"],
            "strengths": ["Optimistic", "Freedom-loving", "Philosophical", "Adventurous", "Honest", "Intellectual"],
            "challenges": ["Reckless", "Tactless", "Impatient", "Over-promising", "Inconsistent"],
            "core_values": ["Freedom", "Truth", "Adventure", "Wisdom", "Expansion"],
            "motivation": "To explore, expand horizons, and seek truth",
            "fears": ["Confinement", "Details", "Commitment", "Routine"],
        },
        "wealth_profile": {
            "style": "Global Growth Investor & Opportunity Explorer",
            "strengths": ["Optimistic outlook", "Global perspective", "Risk-taking", "Seeing big picture"],
            "challenges": ["Over-optimism", "Ignoring details", "Reckless speculation", "Lack of patience"],
            "best_investments": ["International markets", "Growth stocks", "Travel/leisure sector", "Education sector", "Emerging markets"],
            "money_mindset": "Money is freedom to explore and expand",
            "ideal_portfolio": "60% global equities, 20% emerging markets, 15% alternatives, 5% cash",
            "risk_tolerance": "High - Optimistic about long-term growth",
        },
        "relationships": {
            "best_matches": ["Aries", "Leo", "Libra", "Aquarius"],
            "challenging_matches": ["Virgo", "Pisces"],
            "business_partners": ["Aries", "Leo", "Gemini"],
        },
        "house": 9,
        "body_part": "Hips, Thighs",
        "colors": ["Purple", "Turquoise", "Violet"],
        "gemstones": ["Turquoise", "Amethyst", "Tanzanite"],
        "lucky_numbers": [3, 9, 12, 21],
    },
    "Capricorn": {
        "name": "Capricorn",
        "symbol": "♑",
        "element": "Earth",
        "modality": "Cardinal",
        "ruler": "Saturn",
        "date_range": {"start": (12, 22), "end": (1, 19)},
        "personality": {
            "keywords": ["CEO", "Builder", "Father", "Authority", "Mountain Goat"],
            "strengths": ["Disciplined", "Responsible", "Ambitious", "Patient", "Practical", "Strategic"],
            "challenges": ["Pessimistic", "Stubborn", "Cynical", "Fearful", "Rigid"],
            "core_values": ["Success", "Status", "Structure", "Legacy", "Achievement"],
            "motivation": "To achieve, build lasting structures, and leave a legacy",
            "fears": ["Failure", "Public embarrassment", "Poverty", "Lack of control"],
        },
        "wealth_profile": {
            "style": "Long-term Empire Builder & Traditional Investor",
            "strengths": ["Long-term planning", "Discipline", "Building wealth slowly", "Strategic thinking"],
            "challenges": ["Too conservative", "Pessimistic outlook", "Missing innovation", "Work-life imbalance"],
            "best_investments": ["Blue-chip stocks", "Real estate", "Traditional businesses", "Government bonds", "Index funds"],
            "money_mindset": "Money is achievement, status, and legacy",
            "ideal_portfolio": "50% established equities, 25% real estate, 20% bonds, 5% cash",
            "risk_tolerance": "Low to Moderate - Prefers proven, traditional investments",
        },
        "relationships": {
            "best_matches": ["Taurus", "Virgo", "Scorpio", "Pisces"],
            "challenging_matches": ["Aries", "Libra"],
            "business_partners": ["Taurus", "Virgo", "Scorpio"],
        },
        "house": 10,
        "body_part": "Bones, Knees, Skin",
        "colors": ["Brown", "Black", "Dark Green"],
        "gemstones": ["Garnet", "Black Onyx", "Ruby"],
        "lucky_numbers": [8, 10, 17, 26],
    },
    "Aquarius": {
        "name": "Aquarius",
        "symbol": "♒",
        "element": "Air",
        "modality": "Fixed",
        "ruler": "Saturn/Uranus",
        "date_range": {"start": (1, 20), "end": (2, 18)},
        "personality": {
            "keywords": ["Innovator", "Humanitarian", "Rebel", "Visionary", "Genius"],
            "strengths": ["Progressive", "Original", "Independent", "Humanitarian", "Intellectual", "Innovative"],
            "challenges": ["Detached", "Stubborn", "Aloof", "Unpredictable", "Extremist"],
            "core_values": ["Freedom", "Innovation", "Humanity", "Progress", "Individuality"],
            "motivation": "To innovate, revolutionize, and improve humanity",
            "fears": ["Conformity", "Emotional intimacy", "Tradition", "Restriction"],
        },
        "wealth_profile": {
            "style": "Innovation Investor & Disruption Capitalist",
            "strengths": ["Seeing future trends", "Technology investing", "Unconventional strategies", "Network effects"],
            "challenges": ["Too far ahead", "Ignoring fundamentals", "Detached from reality", "Contrarian extremes"],
            "best_investments": ["Technology stocks", "Cryptocurrency", "Green energy", "Biotech", "Disruptive innovations"],
            "money_mindset": "Money should serve humanity and fund innovation",
            "ideal_portfolio": "40% tech/innovation, 30% crypto/alternatives, 20% ESG, 10% experimental",
            "risk_tolerance": "High - Willing to bet on the future",
        },
        "relationships": {
            "best_matches": ["Gemini", "Libra", "Aries", "Sagittarius"],
            "challenging_matches": ["Taurus", "Scorpio"],
            "business_partners": ["Gemini", "Libra", "Sagittarius"],
        },
        "house": 11,
        "body_part": "Ankles, Circulatory System",
        "colors": ["Electric Blue", "Turquoise", "Silver"],
        "gemstones": ["Amethyst", "Aquamarine", "Garnet"],
        "lucky_numbers": [4, 11, 22, 29],
    },
    "Pisces": {
        "name": "Pisces",
        "symbol": "♓",
        "element": "Water",
        "modality": "Mutable",
        "ruler": "Jupiter/Neptune",
        "date_range": {"start": (2, 19), "end": (3, 20)},
        "personality": {
            "keywords": ["Mystic", "Artist", "Dreamer", "Healer", "Empath"],
            "strengths": ["Compassionate", "Intuitive", "Creative", "Gentle", "Wise", "Musical"],
            "challenges": ["Escapist", "Over-sensitive", "Indecisive", "Lazy", "Victim mentality"],
            "core_values": ["Compassion", "Spirituality", "Creativity", "Unity", "Transcendence"],
            "motivation": "To transcend, create, heal, and unite",
            "fears": ["Reality", "Criticism", "Material world", "Boundaries"],
        },
        "wealth_profile": {
            "style": "Intuitive Investor & Creative Wealth Builder",
            "strengths": ["Intuitive timing", "Creative ventures", "Seeing hidden patterns", "Empathetic investing"],
            "challenges": ["Lack of boundaries", "Escapist tendencies", "Poor money management", "Too trusting"],
            "best_investments": ["Creative industries", "Water resources", "Pharmaceuticals", "Music/entertainment", "Spiritual ventures"],
            "money_mindset": "Money is energy that flows like water",
            "ideal_portfolio": "35% creative/intuitive picks, 30% stable income, 25% liquid assets, 10% charitable giving",
            "risk_tolerance": "Variable - Depends on intuition and emotional state",
        },
        "relationships": {
            "best_matches": ["Cancer", "Scorpio", "Taurus", "Capricorn"],
            "challenging_matches": ["Gemini", "Sagittarius"],
            "business_partners": ["Cancer", "Scorpio", "Taurus"],
        },
        "house": 12,
        "body_part": "Feet, Immune System",
        "colors": ["Sea Green", "Lavender", "Aquamarine"],
        "gemstones": ["Aquamarine", "Bloodstone", "Jade"],
        "lucky_numbers": [3, 7, 12, 16],
    },
}

PLANETARY_INFLUENCES: dict[str, dict[str, str]] = {
    "Mercury": {
        "meaning": "Communication, intellect, trade",
        "retrograde": "Miscommunication, delays, review",
        "wealth": "Information advantage, trading skills, networking",
    },
    "Venus": {
        "meaning": "Love, beauty, values, money",
        "retrograde": "Relationship reviews, value reassessment",
        "wealth": "Attraction of resources, aesthetic investments, partnerships",
    },
    "Mars": {
        "meaning": "Action, aggression, energy",
        "retrograde": "Frustration, redirected energy",
        "wealth": "Initiative, competitive advantage, risk-taking",
    },
    "Jupiter": {
        "meaning": "Expansion, luck, philosophy",
        "retrograde": "Internal growth, philosophical review",
        "wealth": "Abundance, opportunities, optimism, growth",
    },
    "Saturn": {
        "meaning": "Discipline, restriction, karma",
        "retrograde": "Karmic review, restructuring",
        "wealth": "Long-term planning, discipline, structure, patience",
    },
    "Uranus": {
        "meaning": "Innovation, rebellion, sudden change",
        "retrograde": "Internal revolution, unique insights",
        "wealth": "Disruption profits, technology, unconventional strategies",
    },
    "Neptune": {
        "meaning": "Spirituality, illusion, creativity",
        "retrograde": "Spiritual awakening, clarity",
        "wealth": "Intuitive investments, creative ventures, avoid deception",
    },
    "Pluto": {
        "meaning": "Transformation, power, regeneration",
        "retrograde": "Deep transformation, power dynamics",
        "wealth": "Wealth transformation, power plays, hidden resources",
    },
}

HOUSE_MEANINGS: dict[int, dict[str, Any]] = {
    1: {"name": "Self", "themes": ["Identity", "Appearance", "First impressions", "Initiative"]},
    2: {"name": "Resources", "themes": ["Money", "Values", "Possessions", "Self-worth"]},
    3: {"name": "Communication", "themes": ["Learning", "Siblings", "Short trips", "Mental activity"]},
    4: {"name": "Home", "themes": ["Family", "Roots", "Security", "Real estate"]},
    5: {"name": "Creativity", "themes": ["Romance", "Children", "Speculation", "Self-expression"]},
    6: {"name": "Service", "themes": ["Work", "Health", "Routine", "Analysis"]},
    7: {"name": "Partnership", "themes": ["Marriage", "Business partners", "Open enemies", "Contracts"]},
    8: {"name": "Transformation", "themes": ["Shared resources", "Death/rebirth", "Occult", "Investments"]},
    9: {"name": "Philosophy", "themes": ["Higher learning", "Travel", "Philosophy", "Publishing"]},
    10: {"name": "Career", "themes": ["Public image", "Authority", "Achievement", "Status"]},
    11: {"name": "Community", "themes": ["Friends", "Groups", "Hopes", "Social causes"]},
    12: {"name": "Spirituality", "themes": ["Hidden things", "Karma", "Spirituality", "Self-undoing"]},
}

# Element pairs scored as supportive or tense, order-independent.
HARMONIOUS_ELEMENTS = [frozenset({"Fire", "Air"}), frozenset({"Earth", "Water"})]
CHALLENGING_ELEMENTS = [frozenset({"Fire", "Water"}), frozenset({"Earth", "Air"})]

DEFAULT_ARCHETYPE = "Emerging Wealth Builder"

_ELEMENT_ARCHETYPES: dict[str, dict[str, Any]] = {
    "Fire": {
        "archetype": "Pioneering Wealth Warrior",
        "description": "You forge new paths to prosperity with courage and innovation",
        "strengths": ["Bold decision-making", "Entrepreneurial spirit", "Quick action", "Leadership"],
        "opportunities": ["Startups", "Growth investments", "Leadership roles", "Innovation sectors"],
        "strategy": "Channel your fire energy into calculated risks with proper risk management",
    },
    "Earth": {
        "archetype": "Sovereign Wealth Builder",
        "description": "You build lasting wealth through patience, strategy, and solid foundations",
        "strengths": ["Long-term vision", "Value recognition", "Practical approach", "Asset building"],
        "opportunities": ["Real estate", "Value investing", "Traditional businesses", "Commodities"],
        "strategy": "Focus on tangible assets and compound growth over time",
    },
    "Air": {
        "archetype": "Quantum Wealth Strategist",
        "description": "You leverage information, connections, and innovation for wealth creation",
        "strengths": ["Information processing", "Networking", "Adaptability", "Strategic thinking"],
        "opportunities": ["Technology", "Communications", "Intellectual property", "Trading"],
        "strategy": "Diversify intelligently and stay ahead of trends through continuous learning",
    },
    "Water": {
        "archetype": "Intuitive Wealth Alchemist",
        "description": "You transform resources through intuition, timing, and emotional intelligence",
        "strengths": ["Market intuition", "Timing", "Hidden value discovery", "Transformation"],
        "opportunities": ["Turnarounds", "Creative ventures", "Intuitive trades", "Healing industries"],
        "strategy": "Trust your intuition while maintaining emotional boundaries in financial decisions",
    },
}

_MODALITY_ARCHETYPES: dict[str, tuple[str, str]] = {
    "Cardinal": (
        "Wealth Initiative Leader",
        "You initiate wealth-building ventures with leadership and vision",
    ),
    "Fixed": (
        "Wealth Consolidation Master",
        "You excel at building and maintaining stable wealth structures",
    ),
}


def get_sign(name: Optional[str]) -> Optional[dict[str, Any]]:
    """Return the record for a sign name, or None if it is not a zodiac sign."""
    if not name:
        return None
    return ZODIAC_DATABASE.get(name)


def risk_level(label: Optional[str]) -> float:
    """Map a risk tolerance label to its ordinal level.

    Labels may carry a trailing explanation ("High - Willing to bet on the
    future"); only the part before " - " is used. Unknown labels sit at the
    Moderate level.
    """
    if not label:
        return RISK_LEVELS["Moderate"]
    key = label.split(" - ")[0].strip()
    for name, level in RISK_LEVELS.items():
        if name.lower() == key.lower():
            return level
    return RISK_LEVELS["Moderate"]


def is_risk_aligned(natural: Optional[str], stated: Optional[str]) -> bool:
    """True when two risk labels sit at most one level apart."""
    return abs(risk_level(natural) - risk_level(stated)) <= 1


def compatibility(sign_a: str, sign_b: str) -> int:
    """Score how well two signs work together, 0-100.

    Unknown signs score the neutral base of 50.
    """
    data_a = get_sign(sign_a)
    data_b = get_sign(sign_b)
    if data_a is None or data_b is None:
        return 50

    score = 50
    element_a = data_a["element"]
    element_b = data_b["element"]
    pair = frozenset({element_a, element_b})

    if element_a == element_b:
        score += 30
    if pair in HARMONIOUS_ELEMENTS:
        score += 20
    if pair in CHALLENGING_ELEMENTS:
        score -= 10

    # Each direction counts separately, so a mutual match adds twice.
    if sign_b in data_a["relationships"]["best_matches"]:
        score += 15
    if sign_a in data_b["relationships"]["best_matches"]:
        score += 15
    if sign_b in data_a["relationships"]["challenging_matches"]:
        score -= 15
    if sign_a in data_b["relationships"]["challenging_matches"]:
        score -= 15

    if data_a["modality"] == data_b["modality"]:
        score += 10

    return max(0, min(100, score))


def cosmic_weather(user_sun: str, current_sun: str, current_moon: str) -> dict[str, Any]:
    """Classify today's energy for a sun sign against the transiting Sun and Moon."""
    sun_score = compatibility(user_sun, current_sun)
    moon_score = compatibility(user_sun, current_moon)

    if sun_score >= 70:
        energy = "Highly Favorable"
        advice = "Cosmic energies strongly support your initiatives. Take bold action."
        opportunities = ["New ventures", "Important decisions", "Risk-taking", "Expansion"]
        cautions = ["Overconfidence", "Ignoring details"]
        lucky_timing = "Morning and early afternoon"
    elif sun_score >= 50:
        energy = "Favorable"
        advice = "Good energy for steady progress. Focus on building and consolidating."
        opportunities = ["Networking", "Planning", "Research", "Steady investments"]
        cautions = ["Impatience", "Forcing outcomes"]
        lucky_timing = "Midday and evening"
    else:
        energy = "Challenging"
        advice = "Use this time for reflection and careful planning. Avoid major risks."
        opportunities = ["Review", "Correction", "Learning", "Patience"]
        cautions = ["Hasty decisions", "Emotional reactions", "Big investments"]
        lucky_timing = "Late evening and early morning"

    if moon_score >= 70:
        opportunities.append("Intuitive insights")
        advice += " Your emotional intelligence is heightened."
    elif moon_score <= 30:
        cautions.append("Emotional volatility")
        advice += " Stay grounded and avoid emotional decisions."

    return {
        "energy": energy,
        "advice": advice,
        "opportunities": opportunities,
        "cautions": cautions,
        "lucky_timing": lucky_timing,
    }


def wealth_archetype(sun: str, moon: str, rising: str) -> dict[str, Any]:
    """Synthesize a wealth archetype from the sun, moon and rising signs.

    A majority element (two or more of three) picks its archetype directly.
    With three distinct elements the modality counts decide the name and the
    strengths/opportunities are blended from the individual signs. If any of
    the three signs is unknown the generic archetype is returned.
    """
    sun_data = get_sign(sun)
    moon_data = get_sign(moon)
    rising_data = get_sign(rising)

    if sun_data is None or moon_data is None or rising_data is None:
        return {
            "archetype": DEFAULT_ARCHETYPE,
            "description": "Your unique combination creates unlimited potential",
            "strengths": ["Adaptability", "Unique perspective", "Hidden talents"],
            "opportunities": ["Self-discovery", "Unconventional paths", "Personal growth"],
            "strategy": "Explore various investment styles to find your unique approach",
        }

    trio = (sun_data, moon_data, rising_data)
    elements = [d["element"] for d in trio]
    modalities = [d["modality"] for d in trio]

    for element in ("Fire", "Earth", "Air", "Water"):
        if elements.count(element) >= 2:
            template = _ELEMENT_ARCHETYPES[element]
            return {
                "archetype": template["archetype"],
                "description": template["description"],
                "strengths": list(template["strengths"]),
                "opportunities": list(template["opportunities"]),
                "strategy": template["strategy"],
            }

    archetype, description = (
        "Adaptive Wealth Navigator",
        "You flow with market changes and adapt strategies for optimal results",
    )
    for modality in ("Cardinal", "Fixed"):
        if modalities.count(modality) >= 2:
            archetype, description = _MODALITY_ARCHETYPES[modality]
            break

    return {
        "archetype": archetype,
        "description": description,
        "strengths": (
            sun_data["wealth_profile"]["strengths"][:2]
            + moon_data["personality"]["strengths"][:2]
        ),
        "opportunities": (
            sun_data["wealth_profile"]["best_investments"][:2]
            + rising_data["wealth_profile"]["best_investments"][:2]
        ),
        "strategy": "Blend multiple approaches for a uniquely balanced wealth strategy",
    }

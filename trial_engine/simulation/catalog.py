"""
Text Catalog

Names, club name parts, image references and commentary templates used
by the generators and the match/couple message selection.
"""

MEN_IMAGES = [f"/dating/men/man_{i + 1}.png" for i in range(53)]
WOMEN_IMAGES = [f"/dating/women/woman_{i + 1}.png" for i in range(61)]

SURNAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Wilson", "Martinez",
    "Anderson", "Taylor", "Thomas", "Hernandez", "Moore", "Martin", "Jackson", "Thompson", "White", "Lopez",
    "Lee", "Gonzalez", "Harris", "Clark", "Lewis", "Robinson", "Walker", "Perez", "Hall", "Young",
    "Allen", "Sanchez", "Wright", "King", "Scott", "Green", "Baker", "Adams", "Nelson", "Hill",
    "Ramirez", "Campbell", "Mitchell", "Roberts", "Carter", "Phillips", "Evans", "Turner", "Torres", "Parker",
    "Collins", "Edwards", "Stewart", "Flores", "Morris", "Nguyen", "Murphy", "Rivera", "Cook", "Rogers",
    "Morgan", "Peterson", "Cooper", "Reed", "Bailey", "Bell", "Gomez", "Kelly", "Howard", "Ward",
    "Cox", "Diaz", "Richardson", "Wood", "Watson", "Brooks", "Bennett", "Gray", "James", "Reyes",
    "Cruz", "Hughes", "Price", "Myers", "Long", "Foster", "Sanders", "Ross", "Morales", "Powell",
    "Sullivan", "Russell", "Ortiz", "Jenkins", "Gutierrez", "Perry", "Butler", "Barnes", "Fisher", "Henderson",
]

MALE_NAMES = [
    "James", "Liam", "Noah", "Oliver", "Elijah", "Lucas", "Mason", "Logan", "Ethan", "Jacob",
    "Aiden", "Samuel", "Henry", "Owen", "Daniel", "Matthew", "Leo", "David", "Joseph", "Carter",
    "Jonas", "Felix", "Paul", "Max", "Tobias", "Simon", "Jakob", "Julian", "Adrian", "Nico",
]

FEMALE_NAMES = [
    "Olivia", "Emma", "Charlotte", "Amelia", "Sophia", "Isabella", "Mia", "Evelyn", "Harper", "Luna",
    "Camila", "Gianna", "Elizabeth", "Eleanor", "Ella", "Abigail", "Sofia", "Avery", "Scarlett", "Emily",
    "Hannah", "Lea", "Clara", "Marie", "Lena", "Anna", "Laura", "Nora", "Ida", "Frieda",
]

CLUB_NAME_PARTS = {
    "first": [
        "Thunder", "Golden", "Storm", "Iron", "Fire", "Lightning", "Steel", "Wild", "Crimson", "Blue",
        "Silver", "Black", "Green", "Red", "White", "Purple", "Orange", "Yellow", "Pink", "Midnight",
        "Dawn", "Star", "Moon", "Sun", "Sky", "Ocean", "Mountain", "Desert", "Forest", "River",
        "Valley", "Hill", "Rock", "Ice", "Wind", "Earth", "Crystal", "Diamond", "Ruby", "Emerald",
    ],
    "second": [
        "Bolts", "Eagles", "Riders", "Wolves", "Hawks", "Strikes", "Panthers", "Stallions", "Tigers", "Sharks",
        "Arrows", "Ravens", "Dragons", "Bulls", "Lions", "Cobras", "Flames", "Hornets", "Flamingos", "Owls",
        "Breakers", "Crushers", "Walkers", "Blazers", "Waves", "Foxes", "Rangers", "Climbers", "Bears", "Runners",
        "Movers", "Chasers", "Cats", "Bugs", "Hammers", "Horses", "Griffins", "Serpents", "Dogs", "Rhinos",
    ],
    "suffix": ["FC", "United"],
}

MATCH_COMMENTARY = {
    "tie": [
        "What a nail-biting match! Both teams fought valiantly to earn their share of the points.",
        "A thrilling draw! The fans got their money's worth watching these two teams battle it out.",
        "Neither team could break the deadlock in this tactical masterpiece of a match.",
        "A hard-fought stalemate! Both sides showed incredible determination and skill.",
        "The match ends in a draw, but both teams can hold their heads high after this performance!",
    ],
    "low_score": [
        "A defensive masterclass! Both teams' backlines were rock solid throughout the match.",
        "The goalkeepers were the heroes today, making crucial saves to keep the scoreline tight.",
        "A tactical battle where every goal was hard-earned and well-deserved.",
        "Low-scoring but high on drama! Every moment counted in this tense encounter.",
    ],
    "high_score": [
        "What an absolute goal fest! The fans were treated to end-to-end action and spectacular strikes!",
        "Attack was the best form of defense today as both teams threw caution to the wind!",
        "A thrilling high-scoring encounter that had pace, power, and plenty of goals!",
        "The goalkeepers will want to forget this one, but the fans will remember it forever!",
    ],
    "blowout": [
        "A dominant display! One team showed their class with a commanding performance.",
        "That was a statement victory! Pure footballing excellence on display today.",
        "A masterful performance that showcased the beautiful game at its finest.",
        "Clinical finishing and tactical superiority led to this convincing result.",
    ],
    "regular": [
        "A well-contested match with moments of brilliance from both sides!",
        "The beautiful game lived up to its name today with this entertaining encounter.",
        "Both teams gave their all in what turned out to be a memorable match.",
        "A solid performance from both teams in this engaging contest.",
        "The fans were treated to genuine football artistry in this well-played match.",
    ],
}

LIVE_TICKER_EVENTS = {
    "kickoff": [
        "The referee blows the whistle and we're underway!",
        "The match kicks off with both teams looking eager to make an early impression!",
        "Here we go! The ball is in play and the action begins!",
    ],
    "chance": [
        "{team} creates a great scoring opportunity!",
        "What a chance for {team}! The goalkeeper makes a crucial save!",
        "{team} hits the crossbar! So close to breaking the deadlock!",
        "A dangerous cross from {team} but the defense manages to clear it!",
        "{team} forces a corner kick after sustained pressure!",
    ],
    "goal": [
        "GOAL! {scorer} finds the back of the net for {team}! What a strike!",
        "It's in the net! {scorer} scores a brilliant goal for {team}!",
        "GOAL! {scorer} finishes beautifully to give {team} some breathing room!",
        "What a goal! {scorer} with a fantastic effort for {team}!",
        "GOAL! {scorer} converts expertly to put {team} on the scoresheet!",
    ],
    "equalizer": [
        "EQUALIZER! {scorer} levels the score for {team}! What a response!",
        "It's all square! {scorer} brings {team} back into the game!",
        "GOAL! {scorer} equalizes for {team} with a superb finish!",
    ],
    "defense": [
        "Solid defending from {team} as they clear the danger!",
        "Great defensive work from {team} to snuff out that attack!",
        "{team}'s backline stands firm under pressure!",
        "Excellent tackling from {team} to win back possession!",
    ],
}

TRAIT_DISPLAY_WORDS = {
    "openness": {
        "very_low": ["Very traditional", "Creature of habit"],
        "low": ["Likes routine", "Prefers the familiar"],
        "medium": ["Open-minded", "Curious now and then"],
        "high": ["Adventurous", "Loves new ideas"],
        "very_high": ["Always exploring", "Thrill seeker"],
    },
    "sportiness": {
        "very_low": ["Couch potato", "Avoids the gym"],
        "low": ["Occasional walker", "Not very sporty"],
        "medium": ["Stays active", "Casual jogger"],
        "high": ["Gym regular", "Loves sports"],
        "very_high": ["Marathon runner", "Fitness fanatic"],
    },
    "social": {
        "very_low": ["Loves solitude", "Very introverted"],
        "low": ["Quiet type", "Small circle of friends"],
        "medium": ["Balanced social life", "Ambivert"],
        "high": ["Outgoing", "Party goer"],
        "very_high": ["Life of the party", "Knows everyone"],
    },
    "natural": {
        "very_low": ["Glamorous", "Always dressed up"],
        "low": ["Style conscious", "Loves makeup"],
        "medium": ["Casual chic", "Low-key stylish"],
        "high": ["Natural look", "Low maintenance"],
        "very_high": ["Au naturel", "No-fuss everything"],
    },
}

MISC_DISPLAY_WORDS = {
    "cats": {"positive": ["Cat person"], "negative": ["Allergic to cats"]},
    "dogs": {"positive": ["Dog lover"], "negative": ["Not a dog person"]},
    "smoking": {"positive": ["Smoker"], "negative": ["Non-smoker"]},
    "drinking": {"positive": ["Enjoys a drink"], "negative": ["Sober"]},
    "travel": {"positive": ["Globetrotter"], "negative": ["Homebody"]},
    "cooking": {"positive": ["Passionate cook"], "negative": ["Takeout fan"]},
    "reading": {"positive": ["Bookworm"], "negative": ["Not a reader"]},
    "music": {"positive": ["Music lover"], "negative": ["Prefers silence"]},
    "movies": {"positive": ["Film buff"], "negative": ["Skips the cinema"]},
    "outdoors": {"positive": ["Nature lover"], "negative": ["Indoor person"]},
}

COUPLE_MESSAGES = {
    "very_positive": [
        "{person1} and {person2} just announced their engagement!",
        "{person1} and {person2} can't stop smiling at each other.",
    ],
    "positive": [
        "{person1} and {person2} are planning a second date.",
        "{person1} thinks {person2} is really fun to be around.",
    ],
    "neutral": [
        "{person1} and {person2} had a pleasant, if unremarkable, evening.",
        "{person1} and {person2} agreed to stay in touch.",
    ],
    "negative": [
        "{person1} and {person2} ran out of things to talk about.",
        "{person1} left the date with {person2} early.",
    ],
    "very_negative": [
        "{person1} and {person2} got into an argument over dessert.",
        "{person1} blocked {person2} right after the date.",
    ],
}

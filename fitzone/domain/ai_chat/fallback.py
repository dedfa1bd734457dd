"""Canned FitBot answers used when the language model is unavailable"""

import random
import re

FALLBACK_RESPONSES = {
    "greeting": [
        "Hey there! 💪 I'm FitBot, your AI fitness assistant. How can I help you today?",
        "Hi! Welcome to FitZone! I'm here to help with workout tips, nutrition advice, and more. What's on your mind?",
        "Hello, fitness enthusiast! 🏋️ Ready to crush your goals? Ask me anything!",
    ],
    "workout": [
        "For a balanced workout routine, try combining strength training 3x/week with cardio 2x/week. Start with compound exercises like squats, deadlifts, and bench press for maximum results! 💪",
        "A great beginner workout: 3 sets of 10-12 reps each of squats, push-ups, rows, and planks. Rest 60-90 seconds between sets. Consistency is key!",
        "Mix it up! Try HIIT on Monday, strength on Tuesday/Thursday, yoga on Wednesday, and active recovery on weekends. Your body will thank you! 🔥",
    ],
    "nutrition": [
        "For muscle building, aim for 1.6-2.2g protein per kg of body weight. Great sources: chicken, fish, eggs, legumes, and Greek yogurt! 🥗",
        "Stay hydrated! Drink at least 8 glasses of water daily, more if you're working out intensely. Water is crucial for performance and recovery! 💧",
        "Pre-workout: eat complex carbs 2-3 hours before. Post-workout: protein + carbs within 30-45 minutes for optimal recovery! 🍌",
    ],
    "motivation": [
        "Remember: Every rep counts, every step matters! You're not competing with anyone but yourself. Keep pushing! 🌟",
        "The only bad workout is the one that didn't happen. You showed up today - that's already a win! 💪",
        "Progress isn't always visible on the scale. Celebrate the small wins: more energy, better sleep, feeling stronger! 🎯",
    ],
    "membership": [
        "For membership details and pricing, I'd recommend chatting with our admin through the 'Chat with Admin' feature. They can give you personalized options! 📋",
        "We have various membership plans to fit your needs! Connect with our admin via the chat feature for the best deals and current promotions! 🎫",
    ],
    "classes": [
        "FitZone offers various classes including Yoga, HIIT, Spin, Strength Training, and Zumba! Check the Schedule page for timings, or ask our admin for recommendations! 🗓️",
        "Looking for group classes? We have something for everyone! From high-energy Zumba to relaxing Yoga. Visit the Schedule section to find your perfect fit! 🧘",
    ],
    "default": [
        "That's a great question! While I'm still learning, I'd suggest checking with our admin for more specific information. Is there anything else fitness-related I can help with? 🤔",
        "I'm here to help with fitness, nutrition, and gym-related questions! Could you rephrase that or ask me something about workouts, diet, or classes? 💪",
    ],
}

# Checked in order; the first match wins. Greetings only count at the start of the message.
CATEGORY_PATTERNS = [
    ("greeting", re.compile(r"^(hi|hello|hey|greetings|good morning|good evening)", re.I)),
    ("workout", re.compile(r"workout|exercise|training|gym routine|lift|cardio|strength|muscle", re.I)),
    ("nutrition", re.compile(r"diet|nutrition|food|eat|protein|calories|meal|supplement", re.I)),
    ("motivation", re.compile(r"motivat|inspire|tired|lazy|give up|hard|difficult|help me", re.I)),
    ("membership", re.compile(r"member|price|cost|plan|subscription|fee|join", re.I)),
    ("classes", re.compile(r"class|schedule|yoga|zumba|spin|hiit|session", re.I)),
]

SUGGESTIONS = [
    "What's a good workout routine for beginners?",
    "How much protein should I eat daily?",
    "Tips for losing weight effectively",
    "Best exercises for building muscle",
    "How to stay motivated at the gym?",
    "What should I eat before a workout?",
    "How often should I exercise per week?",
    "What are the benefits of strength training?",
]


def keyword_category(message: str) -> str:
    text = message.strip().lower()
    for category, pattern in CATEGORY_PATTERNS:
        if pattern.search(text):
            return category
    return "default"


def fallback_response(message: str) -> str:
    return random.choice(FALLBACK_RESPONSES[keyword_category(message)])


def random_suggestions(count: int = 4) -> list[str]:
    return random.sample(SUGGESTIONS, count)

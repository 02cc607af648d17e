"""Built-in content: three classroom scenarios and the NPCs that present them.

Kept in the same JSON shape a content file uses so the defaults go through
the exact validation path user-supplied content does.
"""

from typing import Any, Dict, List

START_X = 1
START_Y = 1
START_COMFORT = 7

WELCOME_MESSAGE = "Use arrows/WASD to move. Press Space/Enter to interact."

DEFAULT_SCENARIOS: List[Dict[str, Any]] = [
    {
        "id": "noise-cafeteria",
        "cue": "It feels too loud and my body is getting tense.",
        "context": "School cafeteria during lunch.",
        "prompt": "The room is noisy. You're starting to cover your ears.",
        "choices": [
            {
                "id": "ask-break",
                "label": "Ask an adult for a quiet break.",
                "isCorrect": True,
                "why": "Taking a brief break reduces overload and is an appropriate self-advocacy step.",
            },
            {
                "id": "yell",
                "label": "Yell at others to be quiet.",
                "isCorrect": False,
                "why": "Yelling may escalate the situation and doesn't meet your need safely.",
            },
            {
                "id": "ignore",
                "label": "Ignore it and stay uncomfortable.",
                "isCorrect": False,
                "why": "Ignoring signs of distress can make overload worse.",
            },
            {
                "id": "tool",
                "label": "Use headphones or ear defenders and move to a calmer seat.",
                "isCorrect": True,
                "why": "Tools + seating change can lower the noise and help you stay in control.",
            },
        ],
    },
    {
        "id": "unclear-instruction",
        "cue": "I don't understand the directions and feel stuck.",
        "context": "Math class independent work.",
        "prompt": "The worksheet says 'Show your work.' You're not sure what that looks like.",
        "choices": [
            {
                "id": "ask-clarify",
                "label": "Raise hand and ask for clarification or an example.",
                "isCorrect": True,
                "why": "Asking for clarity is a direct self-advocacy strategy that helps you proceed.",
            },
            {
                "id": "copy-peer",
                "label": "Copy a peer's paper without understanding.",
                "isCorrect": False,
                "why": "This doesn't help you learn and may cause other problems.",
            },
            {
                "id": "leave",
                "label": "Leave the room without telling anyone.",
                "isCorrect": False,
                "why": "Leaving unsafely isn't advocacy and could worry adults.",
            },
            {
                "id": "visual",
                "label": "Request a visual model or checklist.",
                "isCorrect": True,
                "why": "Visual supports can make expectations clear and reduce stress.",
            },
        ],
    },
    {
        "id": "need-break-signal",
        "cue": "My heart is racing and I can't focus.",
        "context": "Group project with time pressure.",
        "prompt": "Your group is talking fast. You feel overwhelmed.",
        "choices": [
            {
                "id": "i-statement",
                "label": "Use an 'I' statement: 'I need a 2-minute break to reset.'",
                "isCorrect": True,
                "why": "Polite, specific statements teach others how to support you.",
            },
            {
                "id": "argue",
                "label": "Tell them they're being annoying.",
                "isCorrect": False,
                "why": "Name-calling isn't advocacy and may harm relationships.",
            },
            {
                "id": "masking",
                "label": "Stay silent and push through.",
                "isCorrect": False,
                "why": "Noticing signs + taking action is healthier than masking distress.",
            },
            {
                "id": "timer",
                "label": "Ask to use a timer/visual to pace the task.",
                "isCorrect": True,
                "why": "Tools that structure time can lower stress and improve focus.",
            },
        ],
    },
]

DEFAULT_NPCS: List[Dict[str, Any]] = [
    {"id": "guide", "name": "Guide", "x": 2, "y": 2, "sprite": "🤝", "scenarioId": "unclear-instruction"},
    {"id": "ally", "name": "Ally", "x": 9, "y": 4, "sprite": "🎧", "scenarioId": "noise-cafeteria"},
    {"id": "teammate", "name": "Teammate", "x": 14, "y": 8, "sprite": "⏱️", "scenarioId": "need-break-signal"},
]

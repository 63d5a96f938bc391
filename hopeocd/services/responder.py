# canned response selector for the chat companion
# ordered (keywords -> template) rules, crisis rule first; no model inference.
# when nothing matches, a reply is assembled from fixed phrase banks.

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


CRISIS_RESPONSE = """I'm really concerned about you right now, and I'm so glad you trusted me with these feelings. That takes incredible courage.

First - are you safe right now? Are you somewhere where you won't hurt yourself?

These feelings, as overwhelming as they are, can change. You matter, and your life has value, even when it doesn't feel that way.

**Right now, please reach out:**
• **Call 988** - Suicide & Crisis Lifeline
• **Text HOME to 741741** - Crisis Text Line
• **Call 911** if you're in immediate danger

I'm staying right here with you. Can you tell me what's making this feel so impossible right now?

You don't have to carry this alone. 💙"""

TECHNICAL_DIFFICULTY_RESPONSE = """I'm so sorry - I'm having some technical difficulties right now. This is frustrating, I know, especially when you're reaching out for support.

If this is urgent, please don't hesitate to contact:
• 988 - Suicide & Crisis Lifeline
• Text HOME to 741741
• Your local emergency services

I should be back up and running in just a moment. Thank you for your patience. 💙"""

CONTAMINATION_RESPONSE = """Contamination fears... I want you to know first that this isn't about being "clean" or "dirty." This is your brain's alarm system working overtime, and it's exhausting.

People might see the handwashing or the avoided places and think "just stop doing that," but they don't see that it feels impossible, like your brain is screaming that something terrible will happen if you don't follow the rules.

Your brain is trying to protect you, but it has the threat level wrong. It's a smoke detector that goes off when you make toast: technically working, far too sensitive.

What do your contamination fears focus on most? Illness, spreading germs to others, or something else? Knowing the specific fear helps me support you.

And just talking about this here is already a small exposure. You're being brave. 🌟"""

CHECKING_RESPONSE = """Ah, the checking... I know how torturous that doubt feels.

It's like a mean roommate asking "But are you SURE you locked the door? REALLY sure?" You check, you get thirty seconds of relief, and then the doubt creeps back in.

The cruel irony is that checking makes your memory confidence worse. Your brain concludes "if you need to check this much, you must not be trustworthy."

When you're in that moment of doubt, what does your brain tell you will happen if you don't check? There is usually a catastrophic story underneath, and naming it helps us challenge it.

The fact that you're here talking about this tells me you're ready to start fighting back. That's huge. 💪"""

INTRUSIVE_RESPONSE = """Intrusive thoughts are some of the hardest things to talk about because they feel so shameful. I'm really glad you brought this up.

Having intrusive thoughts doesn't make you a bad person. These thoughts distress you BECAUSE they go against what you value. Someone who wanted to do harmful things wouldn't be horrified by them.

Your brain is playing the worst game of "What if?" imaginable, throwing up exactly the thoughts that clash with who you are.

What kinds of intrusive thoughts are bothering you most? Naming them can take away some of their power, and nothing you tell me will change how I see you. 🤗"""

OVERWHELMED_RESPONSE = """I can really hear how overwhelmed you're feeling. Everything is too much, too fast, too intense. That's such a hard place to be.

Let's put the oxygen mask on first. Can you feel your feet on the floor? Can you take one slow breath with me?

What's one thing, just one, that feels manageable today? Getting through the next hour, making a cup of tea, or simply staying in this conversation. We don't need to solve everything today.

Right now your mood sounds like it's around {mood}/10. You reached out, which means part of you believes things can get better. I believe that too. 🌱"""

EXHAUSTED_RESPONSE = """I can hear how tired you are. Not sleepy-tired, but the bone-deep exhaustion that comes from fighting your own brain every day.

OCD is exhausting. Anxiety is exhausting. Of course you're tired. Anyone would be.

This tiredness doesn't mean you're weak or giving up. It means you've been fighting hard for a long time.

The right kind of help gives energy back, like finally having someone help carry the heavy backpack. What would you do with just a little more energy? ✨"""

IMPROVING_RESPONSE = """Wait - did you just tell me things are getting better? That's HUGE! 🎉

Progress might feel slow or uneven, but any movement toward feeling better with OCD and anxiety is significant. Your brain is literally rewiring itself.

Tell me more. What's different? What are you doing that's helping? I want to understand so we can build on it.

From what you've shared I'd put your mood around {mood}/10 today. Recovery isn't a straight line, and every step forward matters. What feels most different right now? 🌟"""


@dataclass(frozen=True)
class ResponseRule:
    """one keyword rule. first rule whose keywords appear in the message wins"""
    name: str
    keywords: tuple[str, ...]
    template: str
    category: str = "general"
    severity: Optional[str] = None

    def matches(self, text: str) -> bool:
        return any(k in text for k in self.keywords)

    def render(self, context: "UserContext") -> str:
        return self.template.format(mood=context.current_mood)


CRISIS_RULE = ResponseRule(
    name="crisis",
    keywords=("suicide", "hurt myself", "end it", "kill myself"),
    template=CRISIS_RESPONSE,
    category="crisis",
    severity="crisis",
)

# evaluation order is the priority order; the crisis rule must stay first
RULES: tuple[ResponseRule, ...] = (
    CRISIS_RULE,
    ResponseRule("contamination", ("contamination", "germs", "dirty"), CONTAMINATION_RESPONSE, "erp", "moderate"),
    ResponseRule("checking", ("checking", "doubt", "did i"), CHECKING_RESPONSE, "erp", "moderate"),
    ResponseRule("intrusive", ("intrusive", "bad thoughts", "horrible thoughts"), INTRUSIVE_RESPONSE, "cbt", "moderate"),
    ResponseRule("overwhelmed", ("overwhelmed", "too much"), OVERWHELMED_RESPONSE, "mindfulness", "high"),
    ResponseRule("exhausted", ("tired", "exhausted"), EXHAUSTED_RESPONSE, "general", "moderate"),
    ResponseRule("improving", ("better", "progress", "improvement"), IMPROVING_RESPONSE, "general", "low"),
)


ACKNOWLEDGMENTS = (
    "I hear you.",
    "That makes complete sense.",
    "I can really understand that.",
    "Thank you for sharing that with me.",
    "That sounds really difficult.",
    "I appreciate you being so open about this.",
    "That takes courage to say.",
)

VALIDATIONS = (
    "Your feelings are completely valid.",
    "Anyone would struggle with this.",
    "You're not alone in feeling this way.",
    "This is such a human experience.",
    "It's okay to feel overwhelmed by this.",
)

# (substring, mood) in priority order
MOOD_WORDS = (
    (("terrible", "awful"), 2),
    (("bad", "struggling"), 3),
    (("okay", "fine"), 5),
    (("good", "better"), 7),
    (("great", "amazing"), 9),
)

STYLE_WORDS = (
    (("doctor", "professional"), "formal"),
    (("casual", "friend"), "casual"),
)

STRENGTH_WORDS = (
    (("trying", "working on"), "motivation"),
    (("therapy", "help"), "help-seeking"),
    (("family", "friends"), "social support"),
)


@dataclass
class UserContext:
    current_mood: int = 5
    preferred_style: str = "warm"
    strengths: list[str] = field(default_factory=list)


def _first_hit(text: str, table):
    for words, value in table:
        if any(w in text for w in words):
            return value
    return None


def analyze_context(text: str, context: UserContext) -> UserContext:
    """update mood, style and strengths from substrings of a lowercased message"""
    mood = _first_hit(text, MOOD_WORDS)
    if mood is not None:
        context.current_mood = mood

    style = _first_hit(text, STYLE_WORDS)
    if style is not None:
        context.preferred_style = style

    for words, strength in STRENGTH_WORDS:
        if any(w in text for w in words):
            context.strengths.append(strength)
    return context


def select_rule(text: str) -> Optional[ResponseRule]:
    for rule in RULES:
        if rule.matches(text):
            return rule
    return None


def _follow_up_topic(text: str) -> str:
    if "work" in text:
        return "how this affects your work life"
    if "family" in text or "relationship" in text:
        return "how this impacts your relationships"
    if "sleep" in text:
        return "how this affects your sleep and daily routine"
    return "what a typical day looks like when you're struggling with this"


def compose_fallback(text: str, context: UserContext, rng: random.Random) -> str:
    acknowledgment = rng.choice(ACKNOWLEDGMENTS)
    validation = rng.choice(VALIDATIONS)

    if "help" in text or "what do i do" in text:
        direction = (
            "It sounds like you're looking for some direction, which makes total sense. "
            "When we're in the thick of it, it's hard to see the path forward."
        )
    else:
        direction = "I'm really glad you felt comfortable sharing this with me."

    if context.current_mood <= 4:
        mood_line = (
            "I can sense this is a really difficult time for you. That's okay - we don't have to fix "
            "everything today. Sometimes being heard is the first step."
        )
    else:
        mood_line = "I'm hearing some resilience in how you're approaching this, which gives me a lot of hope."

    return (
        f"{acknowledgment} {validation}\n\n"
        "What you're sharing really resonates with me. I can hear both the struggle and the strength "
        "in your words, and both are completely valid.\n\n"
        f"{direction}\n\n"
        f"{mood_line}\n\n"
        "Can you tell me a bit more about what this experience is like for you day-to-day? "
        f"I'm particularly interested in {_follow_up_topic(text)}.\n\n"
        "I'm here, and I'm listening. Take your time. 💙"
    )


@dataclass
class Reply:
    content: str
    rule: Optional[str] = None
    category: str = "general"
    severity: Optional[str] = None


class Responder:
    """picks a reply for one conversation and keeps its user context"""

    def __init__(
        self,
        context: Optional[UserContext] = None,
        rng: Optional[random.Random] = None,
        min_delay: float = 0.0,
        max_delay: float = 0.0,
    ):
        self.context = context or UserContext()
        self.rng = rng or random.Random()
        self.min_delay = min_delay
        self.max_delay = max(max_delay, min_delay)

    def compose(self, message: str) -> Reply:
        text = message.lower()

        # crisis wins over every other keyword and skips context tracking
        if CRISIS_RULE.matches(text):
            return Reply(CRISIS_RULE.template, CRISIS_RULE.name, CRISIS_RULE.category, CRISIS_RULE.severity)

        analyze_context(text, self.context)

        rule = select_rule(text)
        if rule is not None:
            return Reply(rule.render(self.context), rule.name, rule.category, rule.severity)
        return Reply(compose_fallback(text, self.context, self.rng))

    async def respond(self, message: str) -> Reply:
        """simulated thinking time, then the canned reply"""
        delay = self.rng.uniform(self.min_delay, self.max_delay)
        if delay > 0:
            await asyncio.sleep(delay)
        return self.compose(message)

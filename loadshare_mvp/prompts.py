from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from models import HouseholdSetup, TaskResponse
from scoring import CalculatedResults, time_discrepancies
from wmli import WMLIResults

PRIORITY_ORDER = {"critical": 0, "important": 1, "helpful": 2}

HIGH_SHARE = 70
LOW_SHARE = 30
TOGETHER_GAP = 20
CATEGORY_CONCENTRATION = 80


@dataclass
class ConversationPrompt:
    id: str
    category: str               # invisible_work|imbalance|emotion|negotiation|systems|planning
    priority: str               # critical|important|helpful
    title: str
    question: str
    context: str
    discussion_starters: List[str] = field(default_factory=list)
    shared_vocabulary: List[str] = field(default_factory=list)
    action_prompts: List[str] = field(default_factory=list)


SHARED_VOCABULARY: Dict[str, Dict] = {
    "mental_load": {
        "term": "Mental Load",
        "definition": "The cognitive work of planning, remembering, monitoring, and managing household needs",
        "examples": ["Remembering when bills are due", "Planning meals for the week",
                     "Noticing when supplies are running low"],
    },
    "anticipation_work": {
        "term": "Anticipation Work",
        "definition": "Thinking ahead about what needs to be done and when",
        "examples": ["Planning childcare for school holidays", "Remembering to schedule appointments",
                     "Anticipating seasonal needs"],
    },
    "emotional_labour": {
        "term": "Emotional Labour",
        "definition": "Managing feelings, relationships, and the emotional climate of the household",
        "examples": ["Mediating family conflicts", "Remembering important dates", "Managing social obligations"],
    },
    "invisible_work": {
        "term": "Invisible Work",
        "definition": "Tasks and mental work that are essential but often unnoticed by others",
        "examples": ["Monitoring household supplies", "Coordinating schedules",
                     "Maintaining family relationships"],
    },
    "cognitive_labour": {
        "term": "Cognitive Labour",
        "definition": "The mental effort required to plan, organize, and coordinate household activities",
        "examples": ["Creating shopping lists", "Coordinating family schedules",
                     "Researching and making household decisions"],
    },
    "visible_work": {
        "term": "Visible Work",
        "definition": "Time spent physically performing a task, observable by others",
        "examples": ["Cooking dinner", "Doing the laundry", "Driving children to school"],
    },
}


def _vocab(*keys: str) -> List[str]:
    return [f"{SHARED_VOCABULARY[k]['term']}: {SHARED_VOCABULARY[k]['definition']}" for k in keys]


def generate_conversation_prompts(
    results: CalculatedResults,
    wmli: Optional[WMLIResults],
    responses: Sequence[TaskResponse],
    setup: HouseholdSetup,
) -> List[ConversationPrompt]:
    prompts: List[ConversationPrompt] = []
    partner_mental = results.partner_mental_percentage

    if setup.has_partner and results.total_mental_load > 0:
        if results.my_mental_percentage > HIGH_SHARE:
            prompts.append(ConversationPrompt(
                id="mental_load_imbalance",
                category="invisible_work",
                priority="critical",
                title="The Invisible Mental Load",
                question="One person is carrying most of the mental load. How does this feel for both of you?",
                context=f"You carry {results.my_mental_percentage}% of the mental load and your partner "
                        f"carries {partner_mental}%. Mental load includes planning, remembering, monitoring, "
                        "and emotional labour.",
                discussion_starters=[
                    "When you think about all the things you need to remember for our household, how does that feel?",
                    "What would happen if the person doing most of the mental planning stopped for a week?",
                    "Which mental tasks feel most draining? Which feel most important?",
                ],
                shared_vocabulary=_vocab("mental_load", "anticipation_work", "emotional_labour"),
                action_prompts=[
                    "What's one mental task that could be fully transferred to the other person?",
                    "How could we create systems so less mental tracking is needed?",
                ],
            ))
        elif results.my_mental_percentage < LOW_SHARE:
            prompts.append(ConversationPrompt(
                id="partner_carries_most",
                category="imbalance",
                priority="important",
                title="Partner Carries Heavy Mental Load",
                question=f"Your partner handles {partner_mental}% of the mental load. "
                         "How can you take on more responsibility?",
                context="Your partner is carrying most of the household mental load, "
                        "which may be unsustainable long-term.",
                discussion_starters=[
                    "Which areas are you most interested in taking ownership of?",
                    "What would help you feel confident taking on new responsibilities?",
                    "How can your partner help transition responsibilities to you?",
                ],
            ))

    if setup.is_together and partner_mental is not None:
        mental_gap = abs(results.my_mental_percentage - partner_mental)
        visible_gap = abs(results.my_visible_percentage - (results.partner_visible_percentage or 0))
        if mental_gap > TOGETHER_GAP or visible_gap > TOGETHER_GAP:
            prompts.append(ConversationPrompt(
                id="workload_imbalance",
                category="imbalance",
                priority="important",
                title="Significant Workload Imbalance",
                question="There's a significant imbalance in how work is distributed. "
                         "How does this feel for both of you?",
                context=f"Mental load gap: {mental_gap} points. Visible work gap: {visible_gap} points.",
                discussion_starters=[
                    "How does the current distribution feel for each of you?",
                    "What would need to change for this to feel more balanced?",
                    "Which tasks could be redistributed or shared differently?",
                ],
                shared_vocabulary=_vocab("invisible_work", "cognitive_labour"),
                action_prompts=[
                    "What's one high-burden task that could be redistributed?",
                    "How could we better share the mental load of planning and organizing?",
                ],
            ))

    if setup.has_partner:
        for cat, share in results.categories.items():
            if share.my_percentage > CATEGORY_CONCENTRATION and share.task_count > 1:
                name = cat.lower()
                prompts.append(ConversationPrompt(
                    id=f"category-{name.replace(' ', '_')}",
                    category="imbalance",
                    priority="important",
                    title=f"{cat} Concentration",
                    question=f"You handle most {name} tasks. Would you like to share some of this responsibility?",
                    context=f"You're doing {share.my_percentage}% of {name} work.",
                    discussion_starters=[
                        f"Which {name} tasks feel most draining?",
                        f"How could your partner help with {name}?",
                        f"What would need to happen for your partner to own some {name} tasks?",
                    ],
                ))

    if wmli is not None and wmli.my_flags.equity_priority:
        prompts.append(ConversationPrompt(
            id="equity_priority",
            category="negotiation",
            priority="critical",
            title="Time for a Household Conversation",
            question="Some of the tasks you mostly own feel both heavy and unrecognized. "
                     "Can we set aside time to talk about them?",
            context=f"{len(wmli.my_flags.strain_tasks)} high-strain and "
                    f"{len(wmli.my_flags.unfairness_tasks)} low-fairness tasks were flagged.",
            discussion_starters=[
                "Which of these tasks would you most like help with?",
                "What would recognition for this work look like?",
            ],
        ))

    discrepancies = time_discrepancies(responses)
    if discrepancies:
        prompts.append(ConversationPrompt(
            id="time_discrepancies",
            category="systems",
            priority="helpful",
            title="Tasks Taking Different Time Than Expected",
            question="Some tasks take much more or less time than research suggests. "
                     "Should we adjust how we approach these?",
            context=f"Tasks like {', '.join(discrepancies[:2])} differ significantly from typical estimates.",
            discussion_starters=[
                "Are we doing these tasks differently than most people?",
                "Could we make these tasks more efficient?",
                "Should we time ourselves to get a better sense of actual duration?",
            ],
        ))

    prompts.append(ConversationPrompt(
        id="emotional_checkin",
        category="emotion",
        priority="helpful",
        title="How This Feels",
        question="Beyond the numbers, how do you feel about the current household responsibility distribution?",
        context="It's important to discuss not just what gets done, but how the arrangement feels.",
        discussion_starters=[
            "What aspects of household management do you actually enjoy?",
            "What feels unfair or frustrating?",
            "How does the mental load affect your energy for other things?",
        ],
    ))

    prompts.append(ConversationPrompt(
        id="fair_distribution",
        category="negotiation",
        priority="important",
        title="Defining Fairness Together" if setup.has_partner else "Defining What Feels Sustainable",
        question="What would a fair distribution of household work look like for your household?",
        context="Fairness doesn't always mean equal. It means everyone feels the arrangement works.",
        discussion_starters=[
            "What factors should we consider when dividing work? (time, preferences, skills, schedules)",
            "Which tasks do each of us actually enjoy or prefer doing?",
            "How do we want to handle tasks that nobody likes?",
        ],
        shared_vocabulary=[
            "Fair vs Equal: Fair considers individual circumstances, equal means 50/50",
            "Task Ownership: One person takes full responsibility for planning and doing",
            "Task Sharing: Both people contribute, but coordination is needed",
        ],
    ))

    prompts.append(ConversationPrompt(
        id="future_planning",
        category="planning",
        priority="helpful",
        title="Looking Ahead",
        question="How do you want to handle household responsibilities as life changes?",
        context="Mental load distribution often needs revisiting as circumstances change.",
        discussion_starters=[
            "What upcoming changes might affect household management?",
            "How often should we check in about this balance?",
        ],
    ))

    # stable sort keeps insertion order within a priority
    return sorted(prompts, key=lambda p: PRIORITY_ORDER.get(p.priority, 99))

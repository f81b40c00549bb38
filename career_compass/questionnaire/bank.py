"""Default career questionnaire and question lookup."""

from __future__ import annotations

from collections.abc import Iterable

from career_compass.questionnaire.models import (
    Question,
    QuestionCategory,
    QuestionOption,
    QuestionType,
)


def _options(*pairs: tuple[str, str]) -> tuple[QuestionOption, ...]:
    return tuple(QuestionOption(value=value, label=label) for value, label in pairs)


DEFAULT_QUESTIONS: tuple[Question, ...] = (
    Question(
        id="interests-1",
        question="What kind of work genuinely interests you?",
        type=QuestionType.MULTIPLE_CHOICE,
        category=QuestionCategory.INTERESTS,
        options=_options(
            ("technology", "Technology & Programming"),
            ("design", "Design & Creativity"),
            ("health", "Healthcare & Wellness"),
            ("finance", "Finance & Business"),
            ("marketing", "Marketing & Communication"),
            ("data", "Data & Analytics"),
            ("people", "Working with People"),
            ("coaching", "Teaching & Coaching"),
        ),
        required=True,
        help_text="Select all that apply",
    ),
    Question(
        id="interests-2",
        question="Which of these would you enjoy doing most days?",
        type=QuestionType.MULTIPLE_CHOICE,
        category=QuestionCategory.INTERESTS,
        options=_options(
            ("coding", "Writing code and building software"),
            ("design", "Creating visual designs or user experiences"),
            ("analysis", "Analyzing data and finding insights"),
            ("communication", "Communicating with clients or teams"),
            ("strategy", "Developing strategies and plans"),
            ("problem-solving", "Solving complex problems"),
            ("helping", "Helping others achieve their goals"),
            ("creating-content", "Creating content (writing, media, etc.)"),
        ),
        required=True,
        help_text="Choose 3-5 activities",
    ),
    Question(
        id="skills-1",
        question="What skills do you have, including from school or side projects?",
        type=QuestionType.MULTIPLE_CHOICE,
        category=QuestionCategory.SKILLS,
        options=_options(
            ("programming", "Programming/Software Development"),
            ("design-tools", "Design Tools (Figma, Adobe, etc.)"),
            ("data-analysis", "Data Analysis (Excel, SQL, etc.)"),
            ("marketing-tools", "Marketing Tools (Social media, etc.)"),
            ("financial-analysis", "Financial Analysis"),
            ("project-management", "Organizing projects/people"),
            ("communication", "Writing/Speaking clearly"),
            ("coaching", "Teaching/Explaining things"),
            ("sales", "Persuading/Selling"),
            ("none", "None yet"),
        ),
        required=True,
        help_text="Select all that apply",
    ),
    Question(
        id="skills-2",
        question="How do you feel about learning new tools and technologies?",
        type=QuestionType.RATING,
        category=QuestionCategory.SKILLS,
        min=1,
        max=5,
        required=True,
        help_text="1 = Give me stability, 5 = I love new tools",
    ),
    Question(
        id="skills-3",
        question="Any other specific skills or tools? (comma separated)",
        type=QuestionType.TEXT,
        category=QuestionCategory.SKILLS,
        required=False,
        help_text="e.g. Python, SQL, Photoshop",
    ),
    Question(
        id="experience-1",
        question="Where are you in your career journey?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.EXPERIENCE,
        options=_options(
            ("student", "Still in school"),
            ("recent-grad", "Just graduated"),
            ("first-job", "In my first job (0-1 year)"),
            ("early-career", "Early career (1-3 years)"),
            ("mid-career", "Mid career (3-8 years)"),
            ("senior", "Senior (8+ years)"),
            ("executive", "Executive / leadership"),
        ),
        required=True,
    ),
    Question(
        id="experience-2",
        question="How many years of work experience do you have?",
        type=QuestionType.RANGE,
        category=QuestionCategory.EXPERIENCE,
        min=0,
        max=50,
        required=False,
    ),
    Question(
        id="experience-3",
        question="Have you done any internships, part-time work, or side projects?",
        type=QuestionType.MULTIPLE_CHOICE,
        category=QuestionCategory.EXPERIENCE,
        options=_options(
            ("internship", "Internships"),
            ("part-time", "Part-time jobs"),
            ("freelance", "Freelance/side projects"),
            ("volunteer", "Volunteer work"),
            ("club", "School clubs/organizations"),
            ("none", "Not really"),
        ),
        required=False,
        help_text="Select all that apply",
    ),
    Question(
        id="experience-4",
        question="Which roles have you held? (comma separated)",
        type=QuestionType.TEXT,
        category=QuestionCategory.EXPERIENCE,
        required=False,
        help_text="e.g. Teaching Assistant, Barista, Junior Analyst",
    ),
    Question(
        id="personality-1",
        question="When working on a project, what sounds better?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.PERSONALITY,
        options=_options(
            ("independent", "Headphones on, in the zone alone"),
            ("collaborative", "Brainstorming with others"),
            ("mixed", "Depends on the day/project"),
        ),
        required=True,
    ),
    Question(
        id="personality-2",
        question="Which pace suits you?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.PERSONALITY,
        options=_options(
            ("fast-paced", "Fast-paced (deadlines, pivots, never boring)"),
            ("steady", "Steady and predictable"),
            ("varied", "Mix of both"),
        ),
        required=True,
    ),
    Question(
        id="personality-3",
        question="When you face a problem, you usually:",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.PERSONALITY,
        options=_options(
            ("analytical", "Break it down with data and logic"),
            ("creative", "Think outside the box"),
            ("practical", "Use what worked before"),
            ("mixed", "Depends on the problem"),
        ),
        required=True,
    ),
    Question(
        id="personality-4",
        question="How much people interaction feels right?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.PERSONALITY,
        options=_options(
            ("frequent", "A lot - meetings, calls, constant interaction"),
            ("moderate", "Some - regular check-ins but mostly solo work"),
            ("minimal", "Minimal - occasional syncs, mostly heads-down"),
        ),
        required=True,
    ),
    Question(
        id="personality-5",
        question="Would you like to lead people someday?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.PERSONALITY,
        options=_options(
            ("yes", "Yes"),
            ("maybe", "Maybe"),
            ("no", "No"),
        ),
        required=False,
    ),
    Question(
        id="preferences-1",
        question="Where do you want to work?",
        type=QuestionType.MULTIPLE_CHOICE,
        category=QuestionCategory.PREFERENCES,
        options=_options(
            ("remote", "Remote"),
            ("hybrid", "Hybrid"),
            ("onsite", "Office"),
        ),
        required=True,
        help_text="Select all you'd be open to",
    ),
    Question(
        id="preferences-2",
        question="What is the lowest starting salary you would accept?",
        type=QuestionType.RANGE,
        category=QuestionCategory.PREFERENCES,
        min=0,
        max=500000,
        required=True,
        help_text="Annual salary in USD",
    ),
    Question(
        id="preferences-3",
        question="What salary are you aiming for?",
        type=QuestionType.RANGE,
        category=QuestionCategory.PREFERENCES,
        min=0,
        max=1000000,
        required=False,
        help_text="Annual salary in USD",
    ),
    Question(
        id="preferences-4",
        question="Work-life balance: how important?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.PREFERENCES,
        options=_options(
            ("high", "Very - I have a life outside work"),
            ("medium", "Important but flexible for the right opportunity"),
            ("low", "I'm here to grind early in my career"),
        ),
        required=True,
    ),
    Question(
        id="preferences-5",
        question="Are you willing to travel for work?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.PREFERENCES,
        options=_options(
            ("yes", "Yes"),
            ("sometimes", "Sometimes"),
            ("no", "No"),
        ),
        required=False,
    ),
    Question(
        id="preferences-6",
        question="Which fields would you like to work in?",
        type=QuestionType.MULTIPLE_CHOICE,
        category=QuestionCategory.PREFERENCES,
        options=_options(
            ("tech", "Technology"),
            ("healthcare", "Healthcare"),
            ("marketing", "Marketing"),
            ("finance", "Finance"),
            ("education", "Education"),
            ("business", "Business"),
            ("wellness", "Wellness"),
            ("design", "Design"),
        ),
        required=False,
        help_text="Leave empty to consider everything",
    ),
    Question(
        id="values-1",
        question="What matters most to you in a job? (Pick your top 3)",
        type=QuestionType.MULTIPLE_CHOICE,
        category=QuestionCategory.PREFERENCES,
        options=_options(
            ("salary", "Good pay"),
            ("growth", "Learning and growing"),
            ("impact", "Making a difference"),
            ("creativity", "Being creative"),
            ("stability", "Job security"),
            ("flexibility", "Flexible schedule"),
            ("people", "Working with great people"),
            ("challenge", "Being challenged"),
        ),
        required=True,
        help_text="Choose exactly 3",
    ),
    Question(
        id="education-1",
        question="What is your education situation?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.EDUCATION,
        options=_options(
            ("high-school", "High school grad"),
            ("some-college", "Some college (no degree yet)"),
            ("associates", "Associate degree"),
            ("bachelors", "Bachelor's degree"),
            ("masters", "Master's degree"),
            ("phd", "Doctorate"),
        ),
        required=True,
    ),
    Question(
        id="education-2",
        question="What did/are you studying?",
        type=QuestionType.TEXT,
        category=QuestionCategory.EDUCATION,
        required=False,
        help_text="e.g. Psychology, Marketing, Computer Science",
    ),
    Question(
        id="education-3",
        question="Would you do a bootcamp or get a certification if it helped?",
        type=QuestionType.SINGLE_CHOICE,
        category=QuestionCategory.EDUCATION,
        options=_options(
            ("yes", "Yes, if it gets me a good job"),
            ("no", "No, done with school"),
            ("maybe", "Depends on what it is and how long"),
        ),
        required=True,
    ),
)


class Questionnaire:
    """An ordered, id-indexed set of questions."""

    def __init__(self, questions: Iterable[Question] = DEFAULT_QUESTIONS) -> None:
        self._questions = tuple(questions)
        self._by_id: dict[str, Question] = {}
        for question in self._questions:
            if question.id in self._by_id:
                raise ValueError(f"Duplicate question id: {question.id}")
            self._by_id[question.id] = question

    def __len__(self) -> int:
        return len(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def get(self, question_id: str) -> Question | None:
        """Return the question with the given id, if defined."""
        return self._by_id.get(question_id)

    def by_category(self, category: QuestionCategory | str) -> list[Question]:
        """Questions of a category, in definition order."""
        category = QuestionCategory(category)
        return [q for q in self._questions if q.category == category]

    def required(self) -> list[Question]:
        """All required questions, in definition order."""
        return [q for q in self._questions if q.required]


_default_questionnaire: Questionnaire | None = None


def get_default_questionnaire() -> Questionnaire:
    """Get the shared questionnaire built from DEFAULT_QUESTIONS."""
    global _default_questionnaire
    if _default_questionnaire is None:
        _default_questionnaire = Questionnaire(DEFAULT_QUESTIONS)
    return _default_questionnaire

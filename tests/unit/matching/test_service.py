"""Unit tests for the CareerMatchingService."""

from __future__ import annotations

import logging
import math

import pytest


def _service(**overrides):
    from career_compass.matching.config import MatchingConfig
    from career_compass.matching.service import CareerMatchingService

    config = MatchingConfig(_env_file=None, **overrides)  # type: ignore[call-arg]
    return CareerMatchingService(config=config)


def _profile(**data):
    from career_compass.profile.models import UserProfile

    return UserProfile.model_validate(data)


def _skills(*pairs):
    return [{"skill": skill, "importance": importance} for skill, importance in pairs]


class TestScoreSkills:
    """Test importance-weighted skill scoring."""

    def test_two_critical_of_three_skills(self, make_career):
        """Two critical hits and one missing important skill scores 6/8."""
        career = make_career(
            title="Data Analyst",
            required_skills=_skills(
                ("SQL", "critical"), ("Python", "critical"), ("Excel", "important")
            ),
        )
        profile = _profile(skills=["Python", "SQL"])

        score, matched, missing = _service().score_skills(career, profile)

        assert score == pytest.approx(75.0)
        assert matched == ["SQL", "Python"]
        assert missing == ["Excel"]

    def test_full_match_scores_100(self, make_career):
        career = make_career(required_skills=_skills(("SQL", "critical")))

        score, _, _ = _service().score_skills(career, _profile(skills=["sql"]))

        assert score == 100.0

    def test_no_overlap_scores_zero(self, make_career):
        career = make_career(required_skills=_skills(("Figma", "critical")))

        score, matched, missing = _service().score_skills(
            career, _profile(skills=["Accounting"])
        )

        assert score == 0.0
        assert matched == []
        assert missing == ["Figma"]

    def test_empty_requirements_are_neutral(self, make_career):
        score, matched, missing = _service().score_skills(
            make_career(required_skills=[]), _profile(skills=["SQL"])
        )

        assert score == 50.0
        assert matched == []
        assert missing == []

    def test_transferable_skills_count(self, make_career):
        """A questionnaire skill implies the fundamentals it covers."""
        career = make_career(
            required_skills=_skills(("Excel", "critical"), ("Statistics", "important"))
        )

        score, _, _ = _service().score_skills(career, _profile(skills=["data-analysis"]))

        assert score == 100.0

    def test_duplicate_profile_skills_do_not_inflate(self, make_career):
        career = make_career(
            required_skills=_skills(("SQL", "critical"), ("Excel", "critical"))
        )

        score, _, _ = _service().score_skills(
            career, _profile(skills=["SQL", "sql", "SQL"])
        )

        assert score == pytest.approx(50.0)

    def test_adding_a_held_skill_never_lowers_the_score(self, make_career):
        """Monotonicity: requiring another skill the user has cannot hurt."""
        base = _skills(("SQL", "critical"), ("Tableau", "important"))
        profile = _profile(skills=["SQL", "Excel"])
        service = _service()

        for importance in ("critical", "important", "beneficial"):
            before, _, _ = service.score_skills(
                make_career(required_skills=base), profile
            )
            after, _, _ = service.score_skills(
                make_career(required_skills=[*base, *_skills(("Excel", importance))]),
                profile,
            )
            assert after >= before

    def test_fuzzy_matching_follows_config(self, make_career):
        career = make_career(required_skills=_skills(("Kubernetes", "critical")))
        profile = _profile(skills=["Kubernets"])

        fuzzy, _, _ = _service().score_skills(career, profile)
        strict, _, _ = _service(skill_fuzzy_match=False).score_skills(career, profile)

        assert fuzzy == 100.0
        assert strict == 0.0

    def test_fuzzy_threshold_follows_config(self, make_career):
        career = make_career(
            required_skills=_skills(("Kubernetes", "critical"), ("SQL", "beneficial"))
        )
        profile = _profile(skills=["Kubernets", "SQL"])

        score, matched, missing = _service(skill_fuzzy_threshold=1.0).score_skills(
            career, profile
        )

        assert score == pytest.approx(25.0)
        assert matched == ["SQL"]
        assert missing == ["Kubernetes"]


class TestScoreInterests:
    """Test interest scoring."""

    def test_keyword_hits_earn_full_credit(self, make_career):
        career = make_career(keywords=["data", "analysis"])
        profile = _profile(interests=["data", "analysis", "music"])

        score, matched = _service().score_interests(career, profile)

        assert score == pytest.approx(200 / 3)
        assert matched == ["data", "analysis"]

    def test_task_mentions_earn_half_credit(self, make_career):
        career = make_career(
            keywords=["data"],
            daily_tasks=[{"task": "Curate music playlists", "time_percentage": 100}],
        )
        profile = _profile(interests=["data", "music"])

        score, matched = _service().score_interests(career, profile)

        assert score == pytest.approx(75.0)
        assert matched == ["data", "music"]

    def test_category_hint_counts(self, make_career):
        career = make_career(category="healthcare")

        score, matched = _service().score_interests(career, _profile(interests=["health"]))

        assert score == 100.0
        assert matched == ["health"]

    def test_duplicate_interests_are_deduplicated(self, make_career):
        career = make_career(keywords=["data"])

        score, matched = _service().score_interests(
            career, _profile(interests=["data", "Data", "data"])
        )

        assert score == 100.0
        assert matched == ["data"]

    def test_no_interests_is_neutral(self, make_career):
        score, matched = _service().score_interests(make_career(), _profile())

        assert score == 50.0
        assert matched == []


class TestScoreExperience:
    """Test experience scoring."""

    def test_matching_level_and_years_scores_100(self, make_career):
        score, reasoning, relevant = _service().score_experience(
            make_career(), _profile(experience={"level": "entry", "years_of_experience": 1})
        )

        assert score == 100.0
        assert "fits" in reasoning
        assert relevant == []

    def test_under_experienced_decays_but_stays_positive(self, make_career):
        career = make_career(
            salary_ranges=[{"min": 120000, "max": 160000, "experience_level": "senior"}]
        )

        score, reasoning, _ = _service().score_experience(career, _profile())

        expected = 0.7 * 100 * 0.6**2 + 0.3 * 100 * math.exp(-5 / 4)
        assert score == pytest.approx(expected)
        assert "senior" in reasoning

    def test_over_experienced_is_penalized(self, make_career):
        profile = _profile(experience={"level": "senior", "years_of_experience": 10})

        score, _, _ = _service().score_experience(make_career(), profile)

        assert score < 50.0

    def test_related_roles_and_industries_add_bonus(self, make_career):
        career = make_career(
            salary_ranges=[{"min": 60000, "max": 90000, "experience_level": "mid"}],
            related_roles=["Business Analyst"],
            keywords=["retail"],
        )
        plain = _profile()
        background = _profile(
            experience={"roles": ["Business Analyst"], "industries": ["Retail"]}
        )
        service = _service()

        base, _, _ = service.score_experience(career, plain)
        boosted, _, relevant = service.score_experience(career, background)

        assert boosted == pytest.approx(base + 15.0)
        assert relevant == [
            "Related role experience: Business Analyst",
            "Industry experience in Retail",
        ]


class TestScorePreferences:
    """Test preference scoring."""

    def test_partial_salary_overlap_is_graded(self, make_career):
        """[40k, 100k] against [20k, 50k] is neither a pass nor a fail."""
        career = make_career(
            salary_ranges=[{"min": 20000, "max": 50000, "experience_level": "entry"}]
        )
        profile = _profile(preferences={"salary": {"min": 40000, "max": 100000}})

        score, _, tradeoffs = _service().score_preferences(career, profile)

        assert 0.0 < score < 100.0
        assert score == pytest.approx(0.4 * 50 + 0.4 * (10000 / 30000 * 100) + 0.2 * 50)
        assert any("partly overlaps" in t for t in tradeoffs)

    def test_band_reaching_above_preference_ranks_with_higher_pay(self, make_career):
        """A band overlapping the top of [40k, 100k] never trails one wholly above it."""
        service = _service()
        profile = _profile()

        def salary_score(low, high):
            career = make_career(
                salary_ranges=[{"min": low, "max": high, "experience_level": "entry"}]
            )
            return service.score_preferences(career, profile)[0]

        partial = salary_score(90000, 150000)
        touching = salary_score(100000, 150000)
        far_above = salary_score(200000, 300000)
        below = salary_score(20000, 30000)

        assert partial >= touching
        assert partial >= far_above
        assert partial == pytest.approx(0.4 * 50 + 0.4 * 50 + 0.2 * 50)
        assert touching > below

    def test_salary_inside_preference_scores_full(self, make_career):
        career = make_career(
            salary_ranges=[{"min": 50000, "max": 70000, "experience_level": "entry"}],
        )
        profile = _profile(
            preferences={
                "work_environment": {"remote": True},
                "categories": ["tech"],
            }
        )

        score, matched, tradeoffs = _service().score_preferences(career, profile)

        assert score == 100.0
        assert tradeoffs == []
        assert "Preferred field: tech" in matched

    def test_salary_above_preference_is_half_credit(self, make_career):
        career = make_career(
            salary_ranges=[{"min": 120000, "max": 150000, "experience_level": "entry"}]
        )

        salary_only = _service().score_preferences(career, _profile())[0]

        assert salary_only == pytest.approx(0.4 * 50 + 0.4 * 50 + 0.2 * 50)

    def test_salary_below_preference_scores_zero(self, make_career):
        career = make_career(
            salary_ranges=[{"min": 20000, "max": 30000, "experience_level": "entry"}]
        )

        score, _, tradeoffs = _service().score_preferences(career, _profile())

        assert score == pytest.approx(0.4 * 50 + 0.2 * 50)
        assert any("below" in t for t in tradeoffs)

    def test_salary_uses_range_for_user_level(self, make_career):
        career = make_career(
            salary_ranges=[
                {"min": 20000, "max": 30000, "experience_level": "entry"},
                {"min": 60000, "max": 80000, "experience_level": "mid"},
            ]
        )
        entry = _profile()
        mid = _profile(experience={"level": "mid"})
        service = _service()

        assert service.score_preferences(career, mid)[0] > service.score_preferences(
            career, entry
        )[0]

    def test_environment_mismatch_scores_zero(self, make_career):
        career = make_career(work_environment={"onsite": True})
        profile = _profile(preferences={"work_environment": {"remote": True}})

        score, _, tradeoffs = _service().score_preferences(career, profile)

        assert score == pytest.approx(0.4 * 0 + 0.4 * 100 + 0.2 * 50)
        assert tradeoffs

    def test_travel_and_demanding_hours_are_penalized(self, make_career):
        calm = make_career()
        demanding = make_career(
            work_environment={
                "remote": True,
                "travel_required": True,
                "typical_hours": "50+",
            }
        )
        profile = _profile(preferences={"work_life_balance": "high"})
        service = _service()

        calm_score = service.score_preferences(calm, profile)[0]
        demanding_score, _, tradeoffs = service.score_preferences(demanding, profile)

        assert calm_score - demanding_score == pytest.approx(20.0)
        assert "Requires travel" in tradeoffs

    def test_travel_is_fine_when_willing(self, make_career):
        career = make_career(work_environment={"remote": True, "travel_required": True})
        willing = _profile(preferences={"travel_willingness": True})
        unwilling = _profile()
        service = _service()

        assert (
            service.score_preferences(career, willing)[0]
            - service.score_preferences(career, unwilling)[0]
        ) == pytest.approx(10.0)


class TestScorePersonality:
    """Test personality compatibility."""

    ARCHETYPE = {
        "work_style": "independent",
        "pace": "steady",
        "problem_solving": "analytical",
        "communication": "minimal",
    }

    def test_exact_match_scores_100(self, make_career):
        career = make_career(personality=self.ARCHETYPE)

        score, traits, mismatches = _service().score_personality(
            career, _profile(personality=self.ARCHETYPE)
        )

        assert score == 100.0
        assert len(traits) == 4
        assert mismatches == []

    def test_opposites_score_lowest(self, make_career):
        career = make_career(personality=self.ARCHETYPE)
        profile = _profile(
            personality={
                "work_style": "collaborative",
                "pace": "fast-paced",
                "problem_solving": "creative",
                "communication": "frequent",
            }
        )

        score, _, mismatches = _service().score_personality(career, profile)

        assert score == pytest.approx(25.0)
        assert len(mismatches) == 4

    def test_flexible_answers_and_leadership_bonus(self, make_career):
        career = make_career(personality={**self.ARCHETYPE, "leadership_track": True})
        service = _service()

        flexible, _, _ = service.score_personality(career, _profile())
        leader, traits, _ = service.score_personality(
            career, _profile(personality={"leadership": True})
        )

        assert flexible == pytest.approx(75.0)
        assert leader == pytest.approx(85.0)
        assert any("Leadership" in t for t in traits)

    def test_archetype_is_inferred_when_missing(self, make_career):
        from career_compass.matching.service import infer_archetype

        career = make_career(
            title="Data Analyst",
            daily_tasks=[
                {"task": "Meet with clients", "time_percentage": 50},
                {"task": "Write reports", "time_percentage": 50},
            ],
            industry_trends=["Fast-paced growth in analytics"],
            salary_ranges=[
                {"min": 50000, "max": 70000, "experience_level": "entry"},
                {"min": 90000, "max": 120000, "experience_level": "senior"},
            ],
        )

        archetype = infer_archetype(career)

        assert archetype.work_style.value == "collaborative"
        assert archetype.communication.value == "frequent"
        assert archetype.problem_solving.value == "analytical"
        assert archetype.pace.value == "fast-paced"
        assert archetype.leadership_track is True

    def test_inferred_archetype_without_tasks_is_flexible(self, make_career):
        from career_compass.matching.service import infer_archetype

        archetype = infer_archetype(make_career(title="Chef"))

        assert archetype.work_style.value == "mixed"
        assert archetype.communication.value == "moderate"
        assert archetype.problem_solving.value == "mixed"
        assert archetype.leadership_track is False


class TestScoreCareer:
    """Test the combined score and its explanation."""

    def test_overall_is_weighted_sum(self, make_career):
        career = make_career(required_skills=_skills(("SQL", "critical")))
        service = _service()

        match = service.score_career(career, _profile(skills=["SQL"]))

        expected = sum(
            value * service.config.weights[name]
            for name, value in match.sub_scores.as_dict().items()
        )
        assert match.overall_score == pytest.approx(expected)

    def test_custom_weights_change_overall(self, make_career):
        career = make_career(required_skills=_skills(("SQL", "critical")))
        profile = _profile(skills=["SQL"])

        skills_only = _service(
            weight_skills=1.0,
            weight_interests=0.0,
            weight_experience=0.0,
            weight_preferences=0.0,
            weight_personality=0.0,
        ).score_career(career, profile)

        assert skills_only.overall_score == 100.0

    def test_strengths_name_matched_skills(self, make_career):
        career = make_career(
            required_skills=_skills(("SQL", "critical"), ("Python", "critical"))
        )

        match = _service().score_career(career, _profile(skills=["SQL", "Python"]))

        assert "Strong skill match: SQL, Python" in match.strengths

    def test_gaps_name_missing_skills(self, make_career):
        career = make_career(
            required_skills=_skills(("Photoshop", "critical"), ("Illustrator", "critical"))
        )

        match = _service().score_career(career, _profile(skills=["SQL"]))

        assert "Missing key skills: Photoshop, Illustrator" in match.gaps
        assert match.details.missing_skills == ("Photoshop", "Illustrator")

    def test_recommendations_are_capped(self, make_career):
        career = make_career(
            required_skills=_skills(("Excel", "critical")),
            salary_ranges=[{"min": 90000, "max": 120000, "experience_level": "senior"}],
            related_roles=["Analyst"],
            education={
                "minimum_degree": "Master's degree",
                "certifications": ["CFA"],
                "alternative_pathways": ["Bootcamp"],
            },
            industry_trends=["Automation"],
        )
        profile = _profile(education={"level": "high-school"})

        match = _service().score_career(career, profile)

        assert len(match.recommendations) <= 5
        assert match.recommendations[0] == "Develop these skills: Excel"
        assert "Explore alternative pathways: Bootcamp" in match.recommendations
        assert match.details.meets_education_requirements is False

    def test_confidence_is_bounded(self, make_career):
        sparse = _service().score_career(make_career(), _profile())
        rich = _service().score_career(
            make_career(keywords=["a1", "b2", "c3"]),
            _profile(
                interests=["a1", "b2", "c3"],
                skills=["s1", "s2", "s3", "s4", "s5"],
                experience={"years_of_experience": 1},
            ),
        )

        assert 0.3 <= sparse.confidence <= 1.0
        assert 0.3 <= rich.confidence <= 1.0
        assert rich.confidence > sparse.confidence


class TestMatchCareers:
    """Test ranking, filtering and catalog handling."""

    def test_empty_catalog_returns_empty_list(self):
        assert _service().match_careers(_profile(), []) == []

    def test_data_analyst_outranks_graphic_designer(self, make_career):
        analyst = make_career(
            id="data-analyst",
            title="Data Analyst",
            required_skills=_skills(
                ("SQL", "critical"), ("Python", "critical"), ("Excel", "important")
            ),
        )
        designer = make_career(
            id="graphic-designer",
            title="Graphic Designer",
            category="design",
            required_skills=_skills(
                ("Photoshop", "critical"), ("Illustrator", "critical")
            ),
        )
        profile = _profile(skills=["Python", "SQL"], experience={"level": "entry"})

        matches = _service().match_careers(profile, [designer, analyst])

        assert [m.career.id for m in matches] == ["data-analyst", "graphic-designer"]
        assert 55.0 <= matches[0].sub_scores.skills < 100.0
        assert matches[1].sub_scores.skills == 0.0

    def test_results_are_deterministic(self, catalog, analyst_profile):
        service = _service()

        first = service.match_careers(analyst_profile, catalog)
        second = service.match_careers(analyst_profile, catalog)

        assert first == second

    def test_ties_keep_catalog_order(self, make_career):
        careers = [make_career(id=f"career-{i}") for i in range(4)]

        matches = _service().match_careers(_profile(), careers)

        assert [m.career.id for m in matches] == [c.id for c in careers]

    def test_scores_are_bounded(self, catalog, analyst_profile, designer_profile):
        profiles = [
            _profile(),
            analyst_profile,
            designer_profile,
            _profile(
                experience={"level": "executive", "years_of_experience": 40},
                preferences={
                    "work_life_balance": "high",
                    "salary": {"min": 0, "max": 0},
                },
            ),
        ]
        for profile in profiles:
            for match in _service().match_careers(profile, catalog):
                assert 0.0 <= match.overall_score <= 100.0
                for value in match.sub_scores.as_dict().values():
                    assert 0.0 <= value <= 100.0

    def test_default_profile_ranks_whole_catalog(self, catalog):
        matches = _service().match_careers(_profile(), catalog)

        assert len(matches) == len(catalog)

    def test_minimum_score_and_max_results(self, catalog, analyst_profile):
        everything = _service().match_careers(analyst_profile, catalog)
        cutoff = everything[2].overall_score

        filtered = _service(minimum_score=cutoff).match_careers(analyst_profile, catalog)
        limited = _service(max_results=2).match_careers(analyst_profile, catalog)

        assert all(m.overall_score >= cutoff for m in filtered)
        assert len(filtered) >= 3
        assert limited == everything[:2]

    def test_malformed_entries_are_skipped_and_reported(self, make_career, caplog):
        good = make_career()
        catalog = [good, {"id": "broken", "title": "Broken"}]

        with caplog.at_level(logging.WARNING, logger="career_compass"):
            report = _service().match(_profile(), catalog)

        assert [m.career.id for m in report.matches] == [good.id]
        assert [s.career_id for s in report.skipped] == ["broken"]
        assert "Skipping catalog entry 1" in caplog.text

    def test_strict_catalog_raises(self, make_career):
        from career_compass.catalog.models import CatalogEntryError

        with pytest.raises(CatalogEntryError):
            _service(catalog_strict=True).match(
                _profile(), [make_career(), {"id": "broken"}]
            )

    def test_dict_entries_are_validated(self, make_career):
        career = make_career()

        matches = _service().match_careers(_profile(), [career.to_dict()])

        assert matches[0].career == career

    def test_module_level_match_careers(self, make_career, matching_config):
        from career_compass.matching.service import match_careers

        matches = match_careers(_profile(), [make_career()], config=matching_config)

        assert len(matches) == 1


class TestCatalogScenarios:
    """Rankings over the bundled catalog."""

    def test_analyst_profile_prefers_data_analyst(self, catalog, analyst_profile):
        top = _service().match_careers(analyst_profile, catalog)[0]

        assert top.career.id == "data-analyst"
        assert top.strengths

    def test_designer_profile_prefers_graphic_designer(self, catalog, designer_profile):
        top = _service().match_careers(designer_profile, catalog)[0]

        assert top.career.id == "graphic-designer"

    def test_format_match(self, catalog, analyst_profile):
        service = _service()
        match = service.match_careers(analyst_profile, catalog)[0]

        text = service.format_match(match)

        assert text.startswith("Data Analyst (tech)")
        assert "Breakdown: skills=" in text

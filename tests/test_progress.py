"""Tests for progress tracking and stats."""

from datetime import date, datetime, timedelta

import pytest

from liftpal.db import Gateway, WeeklyWorkoutRepository, WorkoutRepository
from liftpal.errors import AuthError, NotFoundError
from liftpal.models.workout import DailyWorkout, Difficulty, WeeklyStatus
from liftpal.services import ProgressAggregator, Sharing


async def complete_all_sets(progress, workout):
    for exercise in workout.exercises:
        for s in exercise.sets:
            await progress.update_exercise_set(exercise.id, s.set_number, 50, 10, True)


async def make_partners(services, users):
    link = await services(users.alice.id).partners.send_invite(users.bob.id)
    await services(users.bob.id).partners.respond_to_invite(link.id, "accepted")
    return link


class TestComputeStats:
    """Tests for ProgressAggregator.compute_stats."""

    async def test_no_workouts(self, users, services):
        stats = await services(users.alice.id).progress.compute_stats()
        assert stats.weekly_workouts == 0
        assert stats.completed_workouts == 0
        assert stats.completion_rate == 0
        assert stats.exercise_completion.total == 0
        assert stats.exercise_completion.rate == 0
        assert stats.partner is None

    async def test_counts_sets_and_workouts(self, users, services):
        alice = services(users.alice.id)
        first = await alice.generator.generate(45, "medium", ["Chest"])
        await alice.generator.generate(45, "medium", ["Back"])

        await complete_all_sets(alice.progress, first)
        await alice.progress.complete_workout(first.id)

        stats = await alice.progress.compute_stats()
        assert stats.weekly_workouts == 2
        assert stats.completed_workouts == 1
        assert stats.completion_rate == 50
        assert stats.exercise_completion.completed == len(first.all_sets)
        assert stats.exercise_completion.total > len(first.all_sets)

    async def test_excludes_shared_and_previous_weeks(self, db_path, users, services, clock):
        alice = services(users.alice.id)
        await alice.generator.generate(45, "medium", ["Chest"])
        await alice.generator.generate(
            45, "medium", ["Back"], sharing=Sharing(is_shared=True, shared_with=[users.bob.id])
        )
        await WorkoutRepository(Gateway(db_path)).create(
            DailyWorkout(
                user_id=users.alice.id,
                title="Old",
                duration=30,
                difficulty=Difficulty.EASY,
                date=clock() - timedelta(days=7),
            )
        )

        stats = await alice.progress.compute_stats()
        assert stats.weekly_workouts == 1

    async def test_partner_uses_latest_week(self, users, services):
        await make_partners(services, users)
        bob = services(users.bob.id)
        template = await bob.generator.generate(30, "easy", ["Core"])
        in_week = await bob.generator.add_workout_to_week(template.id)
        await complete_all_sets(bob.progress, in_week)
        await bob.progress.complete_workout(in_week.id)

        stats = await services(users.alice.id).progress.compute_stats()
        assert stats.partner is not None
        assert stats.partner.partner_id == users.bob.id
        assert stats.partner.name == "Bob Stone"
        assert stats.partner.completed_workouts == 1
        assert stats.partner.completion_rate == 100

    async def test_partner_without_week(self, users, services):
        await make_partners(services, users)
        stats = await services(users.bob.id).progress.compute_stats()
        assert stats.partner.partner_id == users.alice.id
        assert stats.partner.completed_workouts == 0
        assert stats.partner.completion_rate == 0

    async def test_oldest_accepted_link_wins(self, users, services):
        await make_partners(services, users)
        second = await services(users.carol.id).partners.send_invite(users.alice.id)
        await services(users.alice.id).partners.respond_to_invite(second.id, "accepted")

        stats = await services(users.alice.id).progress.compute_stats()
        assert stats.partner.partner_id == users.bob.id
        assert (await services(users.alice.id).partners.accepted_partner()).id == users.bob.id

    async def test_oldest_accepted_link_wins_when_received(self, users, services):
        first = await services(users.carol.id).partners.send_invite(users.alice.id)
        await make_partners(services, users)
        await services(users.alice.id).partners.respond_to_invite(first.id, "accepted")

        stats = await services(users.alice.id).progress.compute_stats()
        assert stats.partner.partner_id == users.carol.id
        assert stats.partner.name == "Carol Diaz"

    async def test_pending_invite_is_not_a_partner(self, users, services):
        await services(users.alice.id).partners.send_invite(users.bob.id)
        stats = await services(users.alice.id).progress.compute_stats()
        assert stats.partner is None

    async def test_requires_identity(self, services):
        with pytest.raises(AuthError):
            await services(None).progress.compute_stats()


class TestUpdateExerciseSet:
    """Tests for set logging and the exercise roll-up."""

    async def test_rolls_up_on_last_set(self, users, services):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest"])
        exercise = workout.exercises[0]
        n = exercise.target_sets

        for set_number in range(1, n):
            assert await alice.progress.update_exercise_set(
                exercise.id, set_number, 60, 10, True
            ) is False
            assert (await alice.progress.get_workout(workout.id)).exercises[0].completed is False

        assert await alice.progress.update_exercise_set(exercise.id, n, 60, 10, True) is True
        reloaded = await alice.progress.get_workout(workout.id)
        assert reloaded.exercises[0].completed is True
        # The workout itself is not completed by the set roll-up
        assert reloaded.completed is False

    async def test_replaces_existing_set(self, users, services):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest"])
        exercise = workout.exercises[0]

        await alice.progress.update_exercise_set(exercise.id, 1, 40, 12, False)
        await alice.progress.update_exercise_set(exercise.id, 1, 45.5, 10, True)

        sets = (await alice.progress.get_workout(workout.id)).exercises[0].sets
        assert len(sets) == exercise.target_sets
        assert (sets[0].weight, sets[0].reps, sets[0].completed) == (45.5, 10, True)

    async def test_idempotent(self, users, services):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Back"])
        exercise = workout.exercises[0]
        await complete_all_sets(alice.progress, workout)

        before = await alice.progress.get_workout(workout.id)
        assert await alice.progress.update_exercise_set(exercise.id, 1, 50, 10, True) is True
        after = await alice.progress.get_workout(workout.id)
        assert before.to_detail_dict() == after.to_detail_dict()

    async def test_unknown_exercise(self, users, services):
        with pytest.raises(NotFoundError):
            await services(users.alice.id).progress.update_exercise_set(9999, 1, 10, 10, True)

    async def test_other_users_exercise(self, users, services):
        workout = await services(users.alice.id).generator.generate(45, "medium", ["Chest"])
        with pytest.raises(NotFoundError):
            await services(users.carol.id).progress.update_exercise_set(
                workout.exercises[0].id, 1, 10, 10, True
            )

    async def test_shared_user_can_log(self, users, services):
        workout = await services(users.alice.id).generator.generate(
            45, "medium", ["Chest"], sharing=Sharing(is_shared=True, shared_with=[users.bob.id])
        )
        exercise = workout.exercises[0]
        assert await services(users.bob.id).progress.update_exercise_set(
            exercise.id, 1, 20, 8, True
        ) is False

    @pytest.mark.parametrize(
        "set_number, weight, reps",
        [(0, 10, 10), (1, -5, 10), (1, 10, -1)],
    )
    async def test_invalid_values(self, users, services, set_number, weight, reps):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest"])
        with pytest.raises(ValueError):
            await alice.progress.update_exercise_set(
                workout.exercises[0].id, set_number, weight, reps, True
            )


class TestCompleteWorkout:
    """Tests for the workout and weekly roll-up."""

    async def test_without_week(self, users, services, clock):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest"])
        assert await alice.progress.complete_workout(workout.id) is True

        reloaded = await alice.progress.get_workout(workout.id)
        assert reloaded.completed is True
        assert reloaded.completed_at == clock()

    async def test_week_completes_with_last_workout(self, db_path, users, services):
        alice = services(users.alice.id)
        template = await alice.generator.generate(45, "medium", ["Chest"])
        copies = [await alice.generator.add_workout_to_week(template.id) for _ in range(3)]
        weeks = WeeklyWorkoutRepository(Gateway(db_path))
        week_id = copies[0].weekly_workout_id

        for copy in copies[:-1]:
            assert await alice.progress.complete_workout(copy.id) is False
            assert (await weeks.get(week_id)).status == WeeklyStatus.IN_PROGRESS

        assert await alice.progress.complete_workout(copies[-1].id) is True
        assert (await weeks.get(week_id)).status == WeeklyStatus.COMPLETED

    async def test_completing_twice(self, users, services):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest"])
        assert await alice.progress.complete_workout(workout.id) is True
        assert await alice.progress.complete_workout(workout.id) is True

    async def test_missing_workout(self, users, services):
        with pytest.raises(NotFoundError):
            await services(users.alice.id).progress.complete_workout(9999)

    async def test_not_owner(self, users, services):
        workout = await services(users.alice.id).generator.generate(45, "medium", ["Chest"])
        with pytest.raises(NotFoundError):
            await services(users.bob.id).progress.complete_workout(workout.id)


class TestListings:
    """Tests for week, favorite and single-workout reads."""

    async def test_current_week_visibility_and_order(self, db_path, users, services):
        alice = services(users.alice.id)
        bob = services(users.bob.id)
        carol = services(users.carol.id)

        own = await alice.generator.generate(45, "medium", ["Chest"])
        shared = await bob.generator.generate(
            45, "medium", ["Back"], sharing=Sharing(is_shared=True, shared_with=[users.alice.id])
        )
        # Carol's weekly workout is hidden from alice; her loose one is not
        loose = await carol.generator.generate(45, "medium", ["Legs"])
        hidden = await carol.generator.add_workout_to_week(loose.id)

        ids = [w.id for w in await alice.progress.get_current_week_workouts()]
        assert own.id in ids
        assert shared.id in ids
        assert loose.id in ids
        assert hidden.id not in ids
        # Same timestamp, so newest id first
        assert ids == sorted(ids, reverse=True)

    async def test_current_week_excludes_last_week(self, db_path, users, services):
        await WorkoutRepository(Gateway(db_path)).create(
            DailyWorkout(
                user_id=users.alice.id,
                title="Saturday",
                duration=30,
                difficulty=Difficulty.EASY,
                date=datetime(2025, 3, 8, 23, 59),
            )
        )
        assert await services(users.alice.id).progress.get_current_week_workouts() == []

    async def test_favorites(self, users, services):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest"])
        await alice.generator.generate(45, "medium", ["Back"])

        assert await alice.progress.toggle_favorite(workout.id, True) == 1
        favorites = await alice.progress.get_favorite_workouts()
        assert [w.id for w in favorites] == [workout.id]
        assert favorites[0].exercises

        assert await alice.progress.toggle_favorite(workout.id, False) == 1
        assert await alice.progress.get_favorite_workouts() == []

    async def test_favorite_requires_owner(self, users, services):
        workout = await services(users.alice.id).generator.generate(45, "medium", ["Chest"])
        assert await services(users.bob.id).progress.toggle_favorite(workout.id, True) == 0

    async def test_get_workout_access(self, users, services):
        workout = await services(users.alice.id).generator.generate(
            45, "medium", ["Chest"], sharing=Sharing(is_shared=True, shared_with=[users.bob.id])
        )
        assert (await services(users.bob.id).progress.get_workout(workout.id)).id == workout.id
        with pytest.raises(NotFoundError):
            await services(users.carol.id).progress.get_workout(workout.id)


class TestDeleteWorkout:
    async def test_delete_removes_children(self, users, services):
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest", "Back"])

        assert await alice.progress.delete_workout(workout.id) == 1
        assert await alice.gateway.query("daily_workouts", {"id": workout.id}) == []
        assert await alice.gateway.query("exercises", {"daily_workout_id": workout.id}) == []
        assert await alice.gateway.query(
            "exercise_sets", {"exercise_id": [e.id for e in workout.exercises]}
        ) == []

    async def test_delete_requires_owner(self, users, services):
        workout = await services(users.alice.id).generator.generate(45, "medium", ["Chest"])
        assert await services(users.bob.id).progress.delete_workout(workout.id) == 0
        assert await services(users.alice.id).progress.get_workout(workout.id)

    async def test_deleting_last_open_workout_completes_week(self, db_path, users, services):
        alice = services(users.alice.id)
        template = await alice.generator.generate(45, "medium", ["Chest"])
        done = await alice.generator.add_workout_to_week(template.id)
        open_ = await alice.generator.add_workout_to_week(template.id)
        assert await alice.progress.complete_workout(done.id) is False

        weeks = WeeklyWorkoutRepository(Gateway(db_path))
        assert (await weeks.get(done.weekly_workout_id)).status == WeeklyStatus.IN_PROGRESS

        assert await alice.progress.delete_workout(open_.id) == 1
        assert (await weeks.get(done.weekly_workout_id)).status == WeeklyStatus.COMPLETED

    async def test_deleting_completed_workout_keeps_week_open(self, db_path, users, services):
        alice = services(users.alice.id)
        template = await alice.generator.generate(45, "medium", ["Chest"])
        done = await alice.generator.add_workout_to_week(template.id)
        await alice.generator.add_workout_to_week(template.id)
        await alice.progress.complete_workout(done.id)

        assert await alice.progress.delete_workout(done.id) == 1
        week = await WeeklyWorkoutRepository(Gateway(db_path)).get(done.weekly_workout_id)
        assert week.status == WeeklyStatus.IN_PROGRESS

    async def test_delete_missing_workout(self, users, services):
        assert await services(users.alice.id).progress.delete_workout(9999) == 0


class TestStreakAndComparison:
    async def test_streak(self, db_path, users, clock):
        gateway = Gateway(db_path, user_id=users.alice.id)
        repo = WorkoutRepository(gateway)
        for days_ago in (0, 1, 2, 4):
            when = clock() - timedelta(days=days_ago)
            workout = await repo.create(
                DailyWorkout(
                    user_id=users.alice.id,
                    title="Day",
                    duration=30,
                    difficulty=Difficulty.EASY,
                    date=when,
                )
            )
            await repo.mark_completed(workout.id, users.alice.id, when)

        progress = ProgressAggregator(gateway, clock=clock)
        assert await progress.current_streak() == 3
        assert await progress.current_streak(today=date(2025, 3, 13)) == 3
        assert await progress.current_streak(today=date(2025, 3, 15)) == 0

    async def test_compare_with_partner(self, users, services):
        await make_partners(services, users)
        alice = services(users.alice.id)
        workout = await alice.generator.generate(45, "medium", ["Chest"])
        exercise = workout.exercises[0]
        await alice.progress.update_exercise_set(exercise.id, 1, 100, 5, True)
        await alice.progress.update_exercise_set(exercise.id, 2, 80, 10, False)
        await alice.progress.complete_workout(workout.id)

        comparison = await alice.progress.compare_with_partner(users.bob.id)
        assert comparison.user.user_id == users.alice.id
        assert comparison.user.weekly_workouts == 1
        assert comparison.user.completed_workouts == 1
        assert comparison.user.completion_rate == 100
        assert comparison.user.total_weight == 500
        assert comparison.user.streak == 1
        assert comparison.partner.name == "Bob Stone"
        assert comparison.partner.weekly_workouts == 0
        assert comparison.partner.total_weight == 0

    async def test_compare_requires_accepted_partner(self, users, services):
        await services(users.alice.id).partners.send_invite(users.bob.id)
        with pytest.raises(NotFoundError):
            await services(users.alice.id).progress.compare_with_partner(users.bob.id)
        with pytest.raises(NotFoundError):
            await services(users.alice.id).progress.compare_with_partner(users.carol.id)

    async def test_streak_requires_identity(self, users, services):
        with pytest.raises(AuthError):
            await services(None).progress.current_streak(users.alice.id)

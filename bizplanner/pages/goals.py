"""
Goals page: goals by category with milestone tracking.

Progress moves two ways:
- in the open form, toggling a milestone recomputes ``progress`` only;
  ``status`` stays whatever the user picked
- toggling a milestone on a saved goal persists milestones, progress and a
  status derived from progress (completed at 100%, in-progress above 0%)

Status may also be edited directly, so status and progress can disagree.
Disagreements are logged as warnings on load, never corrected.
"""

from typing import Any, Dict, List, Tuple

from ..views import filters, forms
from .base_page import ActionResult, BasePage


class GoalsPage(BasePage):

    entity = "Goal"
    required_fields = ("title",)

    def __init__(self, client, cache, **kwargs):
        super().__init__(client, cache, "goals", **kwargs)
        self.goals: List[Dict[str, Any]] = []
        self.tab = "all"
        self.new_milestone = ""

    async def load(self) -> None:
        await self.load_branding()
        self.goals = await self.fetch("Goal")
        for goal, message in self.divergent_goals():
            self.logger.warning(f"Goal {goal.get('id')} '{goal.get('title')}': {message}")

    def visible_goals(self) -> List[Dict[str, Any]]:
        return filters.filter_by_category(self.goals, self.tab)

    def divergent_goals(self) -> List[Tuple[Dict[str, Any], str]]:
        """Goals whose status disagrees with their progress."""
        flagged = []
        for goal in self.goals:
            message = forms.status_divergence(goal)
            if message:
                flagged.append((goal, message))
        return flagged

    def close_form(self) -> None:
        super().close_form()
        self.new_milestone = ""

    async def submit(self) -> ActionResult:
        result = await super().submit()
        if result.success:
            self.new_milestone = ""
        return result

    def _bad_milestone(self, title: str, milestones: List[Dict[str, Any]], index: int) -> ActionResult:
        self.logger.warning(f"Milestone index {index} out of range for goal '{title}'")
        return ActionResult.error(
            f"Goal '{title}' has {len(milestones)} milestones, no milestone #{index + 1}"
        )

    # Form-side milestone editing (nothing is persisted until submit)

    def add_form_milestone(self, title: str = None) -> List[Dict[str, Any]]:
        title = self.new_milestone if title is None else title
        milestones = forms.add_milestone(self.form.values.get("milestones", []), title)
        self.form.update(milestones=milestones)
        self.new_milestone = ""
        return milestones

    def remove_form_milestone(self, index: int) -> List[Dict[str, Any]]:
        milestones = forms.remove_milestone(self.form.values.get("milestones", []), index)
        self.form.update(milestones=milestones)
        return milestones

    def toggle_form_milestone(self, index: int) -> ActionResult:
        milestones = self.form.values.get("milestones", [])
        if milestones and not 0 <= index < len(milestones):
            return self._bad_milestone(self.form.values.get("title"), milestones, index)
        changes = forms.apply_milestone_toggle(self.form.values.get("progress") or 0, milestones, index)
        return ActionResult.ok("Milestone toggled", {"values": self.form.update(**changes)})

    # Persisted milestone toggle

    async def toggle_goal_milestone(self, goal: Dict[str, Any], index: int) -> ActionResult:
        """Flip one milestone of a saved goal and persist progress and status."""
        milestones = goal.get("milestones") or []
        if not milestones:
            return ActionResult.error(f"Goal '{goal.get('title')}' has no milestones")
        if not 0 <= index < len(milestones):
            return self._bad_milestone(goal.get("title"), milestones, index)

        changes = forms.apply_milestone_toggle(goal.get("progress") or 0, milestones, index)
        changes["status"] = forms.goal_status_for_progress(
            changes["progress"], goal.get("status") or "not-started"
        )
        return await self.update_fields(goal["id"], changes)

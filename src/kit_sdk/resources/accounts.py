"""Account endpoints: profile, colours and statistics."""

from typing import Any, Dict, List, Optional

from ..exceptions import ValidationError
from ..utils.dates import DateLike, to_date_only
from .base import ResourceHandler

MAX_COLORS = 5


class AccountsHandler(ResourceHandler):
    """Read and update details of the authenticated account."""

    resource_name = "account"

    async def get_current_account(self) -> Dict[str, Any]:
        """Return the current account and its owning user.

        :return: ``{"user": {"email": ..., "account": {...}}}``
        :rtype: Dict[str, Any]
        """
        path = "/account"
        return self._expect_object(await self._api.get(path), path)

    async def list_colors(self) -> Dict[str, Any]:
        """Return the colour palette used in the account's emails."""
        path = "/account/colors"
        return self._expect_object(await self._api.get(path), path)

    async def update_colors(self, colors: List[str]) -> Dict[str, Any]:
        """Replace the account colour palette.

        :param colors: Between one and five hex colours
        :type colors: List[str]
        :return: ``{"colors": [...]}`` as stored by the API
        :rtype: Dict[str, Any]
        :raises ValidationError: If zero or more than five colours are given
        """
        if not colors:
            raise ValidationError(
                "Cannot update colors to an empty list. "
                "Please enter up to 5 different hex colors",
                field="colors",
            )
        if len(colors) > MAX_COLORS:
            raise ValidationError(
                "Cannot update colors with more than 5 colors specified. "
                "Please specify between 1 and 5 different colors to update to",
                field="colors",
            )

        path = "/account/colors"
        payload = await self._api.put(path, body=self._encode({"colors": list(colors)}))
        return self._expect_object(payload, path)

    async def get_creator_profile(self) -> Dict[str, Any]:
        path = "/account/creator_profile"
        return self._expect_object(await self._api.get(path), path)

    async def get_email_stats(self) -> Dict[str, Any]:
        """Return sent/opened/clicked totals for the last 90 days."""
        path = "/account/email_stats"
        return self._expect_object(await self._api.get(path), path)

    async def get_growth_stats(
        self,
        starting: Optional[DateLike] = None,
        ending: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        """Return subscriber growth between two dates.

        The API defaults to the last 90 days when no range is given.
        Dates are sent as ``YYYY-MM-DD``.

        :param starting: First day of the range
        :type starting: Optional[Union[datetime, date, str]]
        :param ending: Last day of the range
        :type ending: Optional[Union[datetime, date, str]]
        :return: ``{"stats": {...}}``
        :rtype: Dict[str, Any]
        """
        query = []
        if starting is not None and starting != "":
            query.append(("starting", to_date_only(starting)))
        if ending is not None and ending != "":
            query.append(("ending", to_date_only(ending)))

        path = "/account/growth_stats"
        return self._expect_object(await self._api.get(path, query=query), path)

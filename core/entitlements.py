#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Onward Journey Engine v1.0 - Entitlements
Boolean capability checks consulted before premium programs are opened

Version: 1.0.0
Date: 2026-10-17
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
import logging

from config import config

logger = logging.getLogger(__name__)

class EntitlementChecker(ABC):
    """May the user access a program"""

    @abstractmethod
    def can_access_program(self, program_id: str) -> bool:
        pass

class SubscriptionEntitlements(EntitlementChecker):
    """Subscription state supplied by the host; starter programs are always free"""

    def __init__(self, has_active_subscription: bool = False, is_in_free_trial: bool = False,
                 free_program_ids: Optional[Iterable[str]] = None):
        self.has_active_subscription = has_active_subscription
        self.is_in_free_trial = is_in_free_trial
        if free_program_ids is None:
            free_program_ids = config.programs.starter_program_ids
        self.free_program_ids = frozenset(free_program_ids)

    @property
    def can_access_all_programs(self) -> bool:
        return self.has_active_subscription or self.is_in_free_trial

    def can_access_program(self, program_id: str) -> bool:
        has_access = self.can_access_all_programs or program_id in self.free_program_ids
        logger.debug(
            f"Program access check for {program_id}: {has_access} "
            f"(active: {self.has_active_subscription}, trial: {self.is_in_free_trial})"
        )
        return has_access

__all__ = ['EntitlementChecker', 'SubscriptionEntitlements']

# Copyright 2022 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.

from .version import VERSION as __version__  # noqa

from .exceptions import (  # noqa
    CrowdinException,
    ServiceException,
    StreamingException,
)

from .api_data import (
    ClientConfig,
    IssueStatus,
    IssueType,
    MachineTranslationEngine,
    PreTranslateMethod,
    ReportFormat,
    ReportGroupBy,
    ReportMode,
    ReportUnit,
)

from .client import Client


try:
    import asyncio
    import aiohttp
    have_async = True
except ImportError:
    asyncio = None
    aiohttp = None
    have_async = False

if have_async:
    from .client_async import AsyncClient  # noqa

from .util import (  # noqa
    flatten_params,
    pack_files,
)

__all__ = [
    "__version__",
    "Client",
    "ClientConfig",
    "IssueStatus",
    "IssueType",
    "MachineTranslationEngine",
    "PreTranslateMethod",
    "ReportFormat",
    "ReportGroupBy",
    "ReportMode",
    "ReportUnit",
    "CrowdinException",
    "ServiceException",
    "StreamingException",
    "flatten_params",
    "pack_files",
]

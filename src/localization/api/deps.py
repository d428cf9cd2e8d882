from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from localization.core.config import Settings, get_settings
from localization.core.db import get_db

SessionDep = Annotated[Session, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_settings)]

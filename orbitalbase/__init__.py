"""Properties, persistent properties, resource walking and stamping."""

from orbitalbase.exceptions import LoadFailure
from orbitalbase.exceptions import MalformedValue
from orbitalbase.exceptions import NoPersistentProperty
from orbitalbase.classpath import ResourceLoader
from orbitalbase.classpath import ResourceLocation
from orbitalbase.persistent import InMemoryPersistentPropertyProvider
from orbitalbase.persistent import PersistentProperty
from orbitalbase.persistent import PersistentPropertyKey
from orbitalbase.persistent import PersistentPropertyProvider
from orbitalbase.persistent import Response
from orbitalbase.resources import for_all_entries
from orbitalbase.stamper import digest
from orbitalbase.stamper import fast_digest

"""
usemaru Templates - Jinja2 template catalog for resource artifacts

One template per artifact kind, rendered through a shared environment.
Every renderer takes (name, client, conventions) and ignores what it does
not need, so callers dispatch through RENDERERS without special cases.
Import paths between artifacts must match the layout in ARTIFACTS.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from jinja2 import DictLoader, Environment, StrictUndefined, select_autoescape

from usemaru.models import ArtifactKind, ClientMode, ClientRef, Conventions, ResourceName
from usemaru.naming import capitalize, uncapitalize


# ═══════════════════════════════════════════════════════════════════════════
# TEMPLATE SOURCES
# ═══════════════════════════════════════════════════════════════════════════


_PROXY_ERROR = """{% macro proxy_error(message) %}
  } catch (error) {
    if (axios.isAxiosError(error) && error.response) {
      return NextResponse.json(
        { error: error.message, details: error.response.data },
        { status: error.response.status }
      )
    }

    return NextResponse.json(
      { error: {{ message | quote }} },
      { status: 500 }
    )
  }{% endmacro %}"""

COLLECTION_ROUTE = """{% from "proxy_error" import proxy_error %}
import axios from 'axios'
import { NextRequest, NextResponse } from 'next/server'

const url = `${process.env.{{ conv.base_url_env }}}`

export async function GET(request: NextRequest) {
  const authHeader = request.headers.get('authorization')

  try {
    const response = await axios.get(`${url}/{{ name.singular }}`, {
      headers: {
        ...(authHeader && { Authorization: authHeader }),
      },
    })

    return NextResponse.json(response.data)
{{ proxy_error('Failed to fetch ' ~ name.singular) }}
}

export async function POST(request: NextRequest) {
  const authHeader = request.headers.get('authorization')
  const body = await request.json()

  try {
    const response = await axios.post(`${url}/{{ name.singular }}`, body, {
      headers: {
        'Content-Type': 'application/json',
        ...(authHeader && { Authorization: authHeader }),
      },
    })

    return NextResponse.json(response.data)
{{ proxy_error('Failed to create ' ~ name.singular) }}
}
"""

ITEM_ROUTE = """{% from "proxy_error" import proxy_error %}
import axios from 'axios'
import { NextRequest, NextResponse } from 'next/server'
import { RouteParams } from '{{ types_module }}'

const url = `${process.env.{{ conv.base_url_env }}}`

export async function GET(request: NextRequest, { params }: RouteParams) {
  const authHeader = request.headers.get('authorization')
  const { id } = params

  try {
    const response = await axios.get(`${url}/{{ name.singular }}/${id}`, {
      headers: {
        ...(authHeader && { Authorization: authHeader }),
      },
    })

    return NextResponse.json(response.data)
{{ proxy_error('Failed to fetch ' ~ name.singular) }}
}

export async function PUT(request: NextRequest, { params }: RouteParams) {
  const authHeader = request.headers.get('authorization')
  const { id } = params
  const body = await request.json()

  try {
    const response = await axios.put(`${url}/{{ name.singular }}/${id}`, body, {
      headers: {
        'Content-Type': 'application/json',
        ...(authHeader && { Authorization: authHeader }),
      },
    })

    return NextResponse.json(response.data)
{{ proxy_error('Failed to update ' ~ name.singular) }}
}

export async function DELETE(request: NextRequest, { params }: RouteParams) {
  const authHeader = request.headers.get('authorization')
  const { id } = params

  try {
    await axios.delete(`${url}/{{ name.singular }}/${id}`, {
      headers: {
        ...(authHeader && { Authorization: authHeader }),
      },
    })

    return NextResponse.json({ success: true })
{{ proxy_error('Failed to delete ' ~ name.singular) }}
}
"""

TYPE_DECL = """export interface {{ name.capitalized }} {
  id: string
}

export interface RouteParams {
  params: {
    id: string
  }
}

export type Create{{ name.capitalized }}Dto = Omit<{{ name.capitalized }}, 'id'>
export type Update{{ name.capitalized }}Dto = Partial<{{ name.capitalized }}>
"""

VALIDATION_SCHEMA = """import { z } from 'zod'

export const {{ name.singular | uncapitalize }}Schema = z.object({
  id: z.string().optional(),
})

export const create{{ name.capitalized }}Schema = {{ name.singular | uncapitalize }}Schema.omit({ id: true })
export const update{{ name.capitalized }}Schema = {{ name.singular | uncapitalize }}Schema.partial()
"""

DATA_HOOKS = """{% set cap = name.capitalized %}
{% set list_key = "['" ~ name.singular ~ "List']" %}
import { useQuery, useMutation, useQueryClient } from '@tanstack/react-query'
import { toast } from 'react-toastify'
import { {{ cap }}, Create{{ cap }}Dto, Update{{ cap }}Dto } from '{{ types_module }}'

import { fetch{{ cap }}List, fetch{{ cap }}ById, create{{ cap }}, update{{ cap }}, delete{{ cap }} } from '{{ actions_module }}'

export const use{{ cap }}List = () => {
  return useQuery<{{ cap }}[]>({
    queryKey: {{ list_key }},
    queryFn: fetch{{ cap }}List
  })
}

export const use{{ cap }} = (id: string) => {
  return useQuery<{{ cap }}>({
    queryKey: ['{{ name.singular }}', id],
    queryFn: () => fetch{{ cap }}ById(id),
    enabled: !!id
  })
}

export const useCreate{{ cap }} = () => {
  const queryClient = useQueryClient()

  return useMutation({
    mutationFn: (data: Create{{ cap }}Dto) => create{{ cap }}(data),
    onSuccess: () => {
      queryClient.invalidateQueries({ queryKey: {{ list_key }} })
      toast.success('{{ cap }} created successfully')
    },
    onError: (error) => {
      console.error('Error creating {{ name.singular }}:', error)
      toast.error('Failed to create {{ name.singular }}')
    }
  })
}

export const useUpdate{{ cap }} = (id: string) => {
  const queryClient = useQueryClient()

  return useMutation({
    mutationFn: (data: Update{{ cap }}Dto) => update{{ cap }}(id, data),
    onSuccess: () => {
      queryClient.invalidateQueries({ queryKey: ['{{ name.singular }}', id] })
      queryClient.invalidateQueries({ queryKey: {{ list_key }} })
      toast.success('{{ cap }} updated successfully')
    },
    onError: (error) => {
      console.error('Error updating {{ name.singular }}:', error)
      toast.error('Failed to update {{ name.singular }}')
    }
  })
}

export const useDelete{{ cap }} = () => {
  const queryClient = useQueryClient()

  return useMutation({
    mutationFn: (id: string) => delete{{ cap }}(id),
    onSuccess: () => {
      queryClient.invalidateQueries({ queryKey: {{ list_key }} })
      toast.success('{{ cap }} deleted successfully')
    },
    onError: (error) => {
      console.error('Error deleting {{ name.singular }}:', error)
      toast.error('Failed to delete {{ name.singular }}')
    }
  })
}
"""

ACTION_FUNCTIONS = """{% set cap = name.capitalized %}
{% if client.uses_shared_client %}
{% set http = 'api' %}
{% set base = '/' ~ name.singular %}
import api from {{ client.import_specifier | quote }}
{% else %}
{% set http = 'axios' %}
{% set base = conv.api_base_path ~ '/' ~ name.singular %}
import axios from 'axios'
{% endif %}
import { {{ cap }}, Create{{ cap }}Dto, Update{{ cap }}Dto } from '{{ types_module }}'

export async function fetch{{ cap }}List(): Promise<{{ cap }}[]> {
  const response = await {{ http }}.get('{{ base }}')
  return response.data
}

export async function fetch{{ cap }}ById(id: string): Promise<{{ cap }}> {
  const response = await {{ http }}.get(`{{ base }}/${id}`)
  return response.data
}

{% if client.uses_shared_client %}
export async function create{{ cap }}(data: Create{{ cap }}Dto): Promise<{{ cap }}> {
  const response = await api.post('{{ base }}', data)
  return response.data
}

export async function update{{ cap }}(id: string, data: Update{{ cap }}Dto): Promise<{{ cap }}> {
  const response = await api.put(`{{ base }}/${id}`, data)
  return response.data
}
{% else %}
export async function create{{ cap }}(data: Create{{ cap }}Dto): Promise<{{ cap }}> {
  const response = await axios.post('{{ base }}', data, {
    headers: {
      'Content-Type': 'application/json',
    },
  })
  return response.data
}

export async function update{{ cap }}(id: string, data: Update{{ cap }}Dto): Promise<{{ cap }}> {
  const response = await axios.put(`{{ base }}/${id}`, data, {
    headers: {
      'Content-Type': 'application/json',
    },
  })
  return response.data
}
{% endif %}

export async function delete{{ cap }}(id: string): Promise<void> {
  await {{ http }}.delete(`{{ base }}/${id}`)
}
"""

CLIENT_CONFIG = """import axios from 'axios'

const api = axios.create({
  baseURL: {{ conv.api_base_path | quote }},
  headers: {
    'Content-Type': 'application/json',
  }
})

api.interceptors.request.use(
  (config) => {
    const token = typeof window !== 'undefined' ? localStorage.getItem({{ conv.token_storage_key | quote }}) : null

    if (token) {
      config.headers.Authorization = `Bearer ${token}`
    }

    return config
  },
  (error) => Promise.reject(error)
)

export default api
"""

TEMPLATES: dict[str, str] = {
    "proxy_error": _PROXY_ERROR,
    "collection_route.ts": COLLECTION_ROUTE,
    "item_route.ts": ITEM_ROUTE,
    "type_decl.ts": TYPE_DECL,
    "validation_schema.ts": VALIDATION_SCHEMA,
    "data_hooks.ts": DATA_HOOKS,
    "action_functions.ts": ACTION_FUNCTIONS,
    "client_config.ts": CLIENT_CONFIG,
}


# ═══════════════════════════════════════════════════════════════════════════
# JINJA ENVIRONMENT SETUP
# ═══════════════════════════════════════════════════════════════════════════


def create_jinja_env(templates: dict[str, str] | None = None) -> Environment:
    """Create Jinja2 environment with the naming filters."""

    env = Environment(
        loader=DictLoader(templates if templates is not None else TEMPLATES),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    env.filters["capitalize"] = capitalize
    env.filters["uncapitalize"] = uncapitalize

    # Single-quoted TS string literal
    env.filters["quote"] = lambda x: "'" + str(x).replace("'", "\\'") + "'"

    return env


_env = create_jinja_env()


# ═══════════════════════════════════════════════════════════════════════════
# ARTIFACT LAYOUT
# ═══════════════════════════════════════════════════════════════════════════


def types_file(name: ResourceName) -> str:
    return f"types/{name.singular}.ts"


def schemas_file(name: ResourceName) -> str:
    return f"schemas/{name.singular}Schemas.ts"


def hooks_file(name: ResourceName) -> str:
    return f"hooks/use{name.capitalized}.ts"


def actions_file(name: ResourceName) -> str:
    return f"actions/{name.singular}Actions.ts"


def module_path(relative_file: str) -> str:
    """Turn a path inside the resource directory into a sibling import.

    Every importing artifact lives one directory below the resource root,
    so siblings are reached through "../".
    """
    return "../" + relative_file.rsplit(".", 1)[0]


def _context(name: ResourceName, client: ClientRef, conv: Conventions) -> dict:
    return {
        "name": name,
        "client": client,
        "conv": conv,
        "types_module": module_path(types_file(name)),
        "actions_module": module_path(actions_file(name)),
    }


def _renderer(template_name: str) -> Callable[[ResourceName, ClientRef, Conventions], str]:
    def render(name: ResourceName, client: ClientRef, conv: Conventions) -> str:
        return _env.get_template(template_name).render(**_context(name, client, conv))

    render.__name__ = "render_" + template_name.split(".")[0]
    return render


render_collection_route = _renderer("collection_route.ts")
render_item_route = _renderer("item_route.ts")
render_type_decl = _renderer("type_decl.ts")
render_validation_schema = _renderer("validation_schema.ts")
render_data_hooks = _renderer("data_hooks.ts")
render_action_functions = _renderer("action_functions.ts")
render_client_config = _renderer("client_config.ts")


RENDERERS: dict[ArtifactKind, Callable[[ResourceName, ClientRef, Conventions], str]] = {
    ArtifactKind.COLLECTION_ROUTE: render_collection_route,
    ArtifactKind.ITEM_ROUTE: render_item_route,
    ArtifactKind.TYPE_DECL: render_type_decl,
    ArtifactKind.VALIDATION_SCHEMA: render_validation_schema,
    ArtifactKind.DATA_HOOKS: render_data_hooks,
    ArtifactKind.ACTION_FUNCTIONS: render_action_functions,
    ArtifactKind.CLIENT_CONFIG: render_client_config,
}


@dataclass(frozen=True)
class ArtifactSpec:
    """One entry of the fixed artifact catalog."""

    kind: ArtifactKind
    # Path relative to the resource API directory
    relative_path: Callable[[ResourceName], str]

    def render(self, name: ResourceName, client: ClientRef, conv: Conventions) -> str:
        return RENDERERS[self.kind](name, client, conv)


# Resource-scoped artifacts, in write order. ClientConfig is project-scoped
# and placed by the planner.
ARTIFACTS: tuple[ArtifactSpec, ...] = (
    ArtifactSpec(ArtifactKind.COLLECTION_ROUTE, lambda name: "route.ts"),
    ArtifactSpec(ArtifactKind.ITEM_ROUTE, lambda name: "[id]/route.ts"),
    ArtifactSpec(ArtifactKind.TYPE_DECL, types_file),
    ArtifactSpec(ArtifactKind.VALIDATION_SCHEMA, schemas_file),
    ArtifactSpec(ArtifactKind.DATA_HOOKS, hooks_file),
    ArtifactSpec(ArtifactKind.ACTION_FUNCTIONS, actions_file),
)


def render_artifact(
    kind: ArtifactKind,
    name: ResourceName,
    client: ClientRef | None = None,
    conv: Conventions | None = None,
) -> str:
    """Render one artifact by kind."""
    return RENDERERS[kind](name, client or ClientRef(), conv or Conventions())


def is_client_rendered(client: ClientRef) -> bool:
    """Whether the ClientConfig artifact belongs in the output."""
    return client.mode == ClientMode.NEW

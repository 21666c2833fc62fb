"""Literal file bodies for the generated Next.js project.

Bodies that need per-project values use ``{{identifier}}`` placeholders
filled from :func:`saas_scaffold.tree.build_context`.  Page and API sources
contain JSX object literals such as ``{{base: 1}}``; those never match the
placeholder pattern and are registered as static entries anyway.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

PACKAGE_JSON = """\
{
  "name": "{{slug}}",
  "version": "0.1.0",
  "private": true,{{repository_field}}
  "scripts": {
    "dev": "next dev",
    "build": "next build",
    "start": "next start",
    "lint": "eslint . --ext .js,.jsx,.ts,.tsx || true"
  },
  "dependencies": {
    "next": "latest",
    "react": "latest",
    "react-dom": "latest",
    "@chakra-ui/react": "^2.7.0",
    "@emotion/react": "^11.10.5",
    "@emotion/styled": "^11.10.5",
    "framer-motion": "^10.12.16",
    "@clerk/nextjs": "^5.0.0",
    "@supabase/supabase-js": "^2.34.0"{{stripe_dependencies}}
  },
  "devDependencies": {
    "eslint": "^8.47.0"
  }
}
"""

REPOSITORY_FIELD = """
  "repository": {
    "type": "git",
    "url": {{repo_json}}
  },"""

STRIPE_DEPENDENCIES = """,
    "micro": "^10.0.1",
    "stripe": "^11.0.0\""""

README = """\
# {{name}}

## Quickstart (local)
1. Copy .env.staging -> .env.local and fill values (Clerk, Supabase{{stripe_readme}} keys).
2. Apply `supabase/init.sql` to your Supabase project.
3. Run: {{run_dev}}
{{repo_section}}
## Netlify / GitHub Actions
- Add NETLIFY_AUTH_TOKEN and NETLIFY_SITE_ID to GitHub Secrets. The workflow will auto-deploy on push to main.
- Create a Netlify site and enable the Next.js plugin (@netlify/plugin-nextjs).
"""

REPO_SECTION = """
## Repository
```
git init
git remote add origin {{repo}}
```
"""

NETLIFY_TOML = """\
[build]
  command = "npm run build"
  functions = "netlify/functions"
  publish = ".next"
[dev]
  command = "npm run dev"
[plugins]
  [[plugins]]
    package = "@netlify/plugin-nextjs"
"""

GITIGNORE = """\
node_modules
.next
.env*
.netlify
"""

NEXT_CONFIG = """\
/** @type {import('next').NextConfig} */
module.exports = { reactStrictMode: true };
"""

# ---------------------------------------------------------------------------
# Environment templates
# ---------------------------------------------------------------------------

ENV_STAGING = """\
NEXT_PUBLIC_SITE_URL={{staging_url}}
NEXT_PUBLIC_SITE_NAME={{name}}
CLERK_FRONTEND_API=
CLERK_PUBLISHABLE_KEY=
CLERK_SECRET_KEY=
SUPABASE_URL=
SUPABASE_ANON_KEY=
SUPABASE_SERVICE_ROLE_KEY=
{{staging_stripe_env}}"""

ENV_PRODUCTION = """\
NEXT_PUBLIC_SITE_URL={{production_url}}
NEXT_PUBLIC_SITE_NAME={{name}}
CLERK_FRONTEND_API=
CLERK_PUBLISHABLE_KEY=
CLERK_SECRET_KEY=
SUPABASE_URL=
SUPABASE_ANON_KEY=
SUPABASE_SERVICE_ROLE_KEY=
{{production_stripe_env}}"""

STRIPE_ENV = """\
STRIPE_SECRET_KEY={{secret_key}}
STRIPE_WEBHOOK_SECRET={{webhook_secret}}
SUCCESS_URL={{site_url}}/dashboard
CANCEL_URL={{site_url}}/
"""

ENV_LOCAL = """\
# .env.local
NEXT_PUBLIC_SITE_URL={{local_url}}
NEXT_PUBLIC_SITE_NAME={{name}}

# Clerk
NEXT_PUBLIC_CLERK_FRONTEND_API=clerk.your-project.lcl.dev
NEXT_PUBLIC_CLERK_PUBLISHABLE_KEY=pk_test_xxxxxxxxxxxxxxxxxxxxx
CLERK_SECRET_KEY=sk_test_xxxxxxxxxxxxxxxxxxxxx

# Supabase
SUPABASE_URL=https://your-project.supabase.co
SUPABASE_ANON_KEY=eyJhbGciOi...
SUPABASE_SERVICE_ROLE_KEY=eyJhbGciOi...
{{local_stripe_env}}
NEXT_PUBLIC_ENV=development
"""

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

SUPABASE_INIT_SQL = """\
-- supabase/init.sql
-- Creates events + signups tables for analytics and lead capture.

create table if not exists public.events (
  id uuid primary key default gen_random_uuid(),
  type text not null,
  data jsonb,
  created_at timestamptz not null default now()
);

create index if not exists idx_events_type on public.events (type);
create index if not exists idx_events_created_at on public.events (created_at desc);

create table if not exists public.signups (
  id uuid primary key default gen_random_uuid(),
  email text not null,
  source text,
  metadata jsonb,
  created_at timestamptz not null default now()
);

create index if not exists idx_signups_email on public.signups (email);
create index if not exists idx_signups_created_at on public.signups (created_at desc);

alter table public.events enable row level security;
alter table public.signups enable row level security;

create policy "allow_service_insert_events" on public.events
  for insert
  with check (auth.role() = 'service_role');

create policy "allow_service_insert_signups" on public.signups
  for insert
  with check (auth.role() = 'service_role');
"""

SUPABASE_CLIENT = """\
// lib/supabaseClient.ts
import { createClient } from '@supabase/supabase-js'

/**
 * Client-side: use anonymous key
 * Server-side: prefer service role key for privileged ops
 */
const SUPABASE_URL = process.env.NEXT_PUBLIC_SUPABASE_URL || process.env.SUPABASE_URL
const SUPABASE_KEY =
  typeof window === 'undefined'
    ? process.env.SUPABASE_SERVICE_ROLE_KEY
    : process.env.NEXT_PUBLIC_SUPABASE_ANON_KEY || process.env.SUPABASE_ANON_KEY

export const supabase = createClient(SUPABASE_URL!, SUPABASE_KEY!)
"""

# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------

API_SIGNUPS_ADD = """\
// pages/api/signups/add.ts
import { supabase } from '../../../lib/supabaseClient'

export default async function handler(req, res) {
  if (req.method !== 'POST') return res.status(405).end()
  const { email, source } = req.body || {}
  if (!email) return res.status(400).json({ error: 'Missing email' })
  const { error } = await supabase.from('signups').insert([{ email, source, metadata: { ua: req.headers['user-agent'] } }])
  if (error) return res.status(500).json({ error: error.message })
  res.status(200).json({ ok: true })
}
"""

API_EVENTS_TRACK = """\
import { createClient } from '@supabase/supabase-js';
export default async function handler(req, res) {
  const SUPABASE_URL = process.env.SUPABASE_URL;
  const SUPABASE_KEY = process.env.SUPABASE_SERVICE_ROLE_KEY;
  if (!SUPABASE_URL || !SUPABASE_KEY) return res.status(500).json({ error: 'supabase not configured' });
  const sb = createClient(SUPABASE_URL, SUPABASE_KEY);
  const { type, data } = req.body || {};
  const row = { type, data, created_at: new Date().toISOString() };
  const { error } = await sb.from('events').insert([row]);
  if (error) return res.status(500).json({ error: error.message });
  res.json({ ok: true });
}
"""

API_STRIPE_CHECKOUT = """\
import Stripe from 'stripe';
const stripe = new Stripe(process.env.STRIPE_SECRET_KEY || '', { apiVersion: '2022-11-15' });

export default async function handler(req, res) {
  if (req.method !== 'POST') return res.status(405).end();
  const { priceId } = req.body;
  if (!priceId) return res.status(400).json({ error: 'missing priceId' });
  const session = await stripe.checkout.sessions.create({
    mode: 'subscription',
    payment_method_types: ['card'],
    line_items: [{ price: priceId, quantity: 1 }],
    success_url: process.env.SUCCESS_URL,
    cancel_url: process.env.CANCEL_URL,
  });
  res.json({ url: session.url });
}
"""

API_STRIPE_WEBHOOK = """\
import Stripe from 'stripe';
import { buffer } from 'micro';
export const config = { api: { bodyParser: false } };
const stripe = new Stripe(process.env.STRIPE_SECRET_KEY || '', { apiVersion: '2022-11-15' });

export default async function handler(req, res) {
  const sig = req.headers['stripe-signature'];
  const buf = await buffer(req);
  try {
    const evt = stripe.webhooks.constructEvent(buf, sig, process.env.STRIPE_WEBHOOK_SECRET || '');
    // handle events: checkout.session.completed etc
    console.log('stripe event', evt.type);
    res.json({ received: true });
  } catch (err) {
    console.error('webhook error', err);
    res.status(400).send('err');
  }
}
"""

API_HEALTH = """\
export default function handler(req, res) { res.json({ ok: true, now: Date.now() }); }
"""

# ---------------------------------------------------------------------------
# Pages and styles
# ---------------------------------------------------------------------------

APP = """\
import { ChakraProvider } from '@chakra-ui/react';
import { ClerkProvider } from '@clerk/nextjs';
import '../styles/globals.css';

export default function App({ Component, pageProps }) {
  // Clerk expects frontendApi or publishable key in env
  const clerkFrontendApi = process.env.NEXT_PUBLIC_CLERK_FRONTEND_API || process.env.NEXT_PUBLIC_CLERK_PUBLISHABLE_KEY;
  return (
    <ClerkProvider frontendApi={clerkFrontendApi}>
      <ChakraProvider>
        <Component {...pageProps} />
      </ChakraProvider>
    </ClerkProvider>
  );
}
"""

GLOBALS_CSS = """\
/* Minimal global styles - Chakra handles rest */
html,body,#__next{height:100%;}
body{margin:0;font-family:Inter, system-ui, -apple-system, 'Segoe UI', Roboto, 'Helvetica Neue'}
"""

INDEX_PAGE = """\
import { Box, Container, Heading, Text, Stack, Button, SimpleGrid, Flex, VStack } from '@chakra-ui/react';
import Link from 'next/link';

export default function Home() {
  return (
    <Box as="main" py={12}>
      <Container maxW="5xl">
        <Stack spacing={8} textAlign="center">
          <Heading size="2xl">Turn ideas into paying customers in days</Heading>
          <Text color="gray.600">Validated landing + billing + auth scaffold for rapid SaaS experiments.</Text>
          <Flex justify="center" gap={4}>
            <Link href="/sign-up"><Button colorScheme="blue">Get early access</Button></Link>
            <Link href="#features"><Button variant="ghost">See features</Button></Link>
          </Flex>
        </Stack>

        <SimpleGrid columns={{base:1, md:3}} spacing={6} mt={12}>
          <Box p={6} borderWidth={1} rounded="md"><Heading size="md">Fast templates</Heading><Text mt={2}>Launch landing + checkout quickly</Text></Box>
          <Box p={6} borderWidth={1} rounded="md"><Heading size="md">Clerk auth</Heading><Text mt={2}>Email + Google handled</Text></Box>
          <Box p={6} borderWidth={1} rounded="md"><Heading size="md">Stripe billing</Heading><Text mt={2}>Subscription checkout & webhooks</Text></Box>
        </SimpleGrid>

        <Box mt={12}>
          <Heading size="lg">Pricing</Heading>
          <SimpleGrid columns={{base:1, md:3}} spacing={4} mt={4}>
            <Box p={6} borderWidth={1} rounded="md"><Heading size="md">Free</Heading><Text mt={2}>Test ideas</Text></Box>
            <Box p={6} borderWidth={2} rounded="md"><Heading size="md">Pro</Heading><Text mt={2}>Paid & priority</Text></Box>
            <Box p={6} borderWidth={1} rounded="md"><Heading size="md">Agency</Heading><Text mt={2}>White-label</Text></Box>
          </SimpleGrid>
        </Box>

        <Box mt={12}>
          <Heading size="lg">FAQ</Heading>
          <VStack mt={4} align="start" spacing={3}>
            <Box p={4} borderWidth={1} rounded="md"><Text fontWeight="bold">How long to launch?</Text><Text>Under 1 day with this scaffold.</Text></Box>
            <Box p={4} borderWidth={1} rounded="md"><Text fontWeight="bold">Can I add a domain?</Text><Text>Yes, configure in Netlify after deploy.</Text></Box>
          </VStack>
        </Box>
      </Container>
    </Box>
  );
}
"""

SIGN_IN_PAGE = """\
import { SignIn } from '@clerk/nextjs';
export default function SignInPage(){ return <SignIn routing="path" path="/sign-in" /> }
"""

SIGN_UP_PAGE = """\
import { SignUp } from '@clerk/nextjs';
export default function SignUpPage(){ return <SignUp routing="path" path="/sign-up" /> }
"""

DASHBOARD_PAGE = """\
import { useUser, SignedIn, SignedOut, SignInButton } from '@clerk/nextjs';
import { Box, Button, Heading, Text } from '@chakra-ui/react';

export default function Dashboard() {
  const { user } = useUser();
  return (
    <Box p={8}>
      <SignedIn>
        <Heading>Welcome, {user?.firstName || user?.fullName || 'friend'}</Heading>
        <Text mt={4}>This is your dashboard. Check billing, give feedback, or contact the founder.</Text>
        <Box mt={6}><Button colorScheme="blue" onClick={() => alert('open feedback modal')}>Give feedback</Button></Box>
      </SignedIn>
      <SignedOut>
        <Text>Please sign in to view dashboard.</Text>
        <SignInButton><Button mt={4}>Sign in</Button></SignInButton>
      </SignedOut>
    </Box>
  );
}
"""

BLOG_PAGE = """\
import { Box, Heading } from '@chakra-ui/react';
export default function Blog() {
  return (
    <Box p={8}>
      <Heading>Blog</Heading>
      <Box mt={6} bgImage="url('/shared-hero.jpg')" bgSize="cover" h="48" borderRadius="md" />
    </Box>
  );
}
"""

FOUNDER_PAGE = """\
import { Box, Heading } from '@chakra-ui/react';
export default function Founder() {
  const items = [{title:'Run ad test', desc:'7-14 days'}, {title:'First paid', desc:'Convert a user'}];
  return (<Box p={8}><Heading>Founder Dashboard</Heading><Box mt={4}>{items.map((it,i)=> <Box key={i} p={3} borderWidth={1} rounded="md" mb={2}><b>{it.title}</b><div>{it.desc}</div></Box>)}</Box></Box>)
}
"""

# ---------------------------------------------------------------------------
# CI
# ---------------------------------------------------------------------------

DEPLOY_WORKFLOW = """\
name: Build and Deploy to Netlify
on:
  push:
    branches: [ 'main' ]
jobs:
  build-and-deploy:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - name: Setup Node
        uses: actions/setup-node@v4
        with:
          node-version: 18
      - name: Install dependencies
        run: npm ci
      - name: Build
        run: npm run build
      - name: Deploy to Netlify
        uses: nwtgck/actions-netlify@v1.2.4
        with:
          publish-dir: ".next"
          production-deploy: true
        env:
          NETLIFY_AUTH_TOKEN: ${{ secrets.NETLIFY_AUTH_TOKEN }}
          NETLIFY_SITE_ID: ${{ secrets.NETLIFY_SITE_ID }}
"""
